import datetime
import itertools
from pathlib import Path

import pandas as pd
import pytest
from loguru import logger

from albumsync.errors import TransientUploadError
from albumsync.models import Album, RemotePhoto


class FakeRemote:
    """In-memory stand-in for FlickrRemote that records every call."""

    def __init__(self, albums=(), upload_failures=0, uploaded_on=datetime.datetime(2024, 1, 1, 12)):
        self.calls = []
        self._ids = itertools.count(1000)
        self.albums = {}
        self.album_photos = {}
        for album in albums:
            self.albums[album.id] = album
            self.album_photos[album.id] = []
        self.upload_failures = upload_failures
        self.upload_attempts = 0
        self.uploaded_on = uploaded_on
        self.photos = {}
        self.reorders = []

    def _next_id(self):
        return str(next(self._ids))

    def upload_photo(self, file_path, title, description, tags):
        self.calls.append(("upload_photo", file_path, title))
        self.upload_attempts += 1
        if self.upload_failures:
            self.upload_failures -= 1
            raise TransientUploadError(f"connection reset while sending {file_path}")
        photo_id = self._next_id()
        self.photos[photo_id] = RemotePhoto(
            id=photo_id,
            title=title,
            description=description,
            tags=tuple(tags),
            date_upload=int(self.uploaded_on.timestamp()),
        )
        return photo_id

    def list_albums(self):
        self.calls.append(("list_albums",))
        return list(self.albums.values())

    def create_album(self, album):
        self.calls.append(("create_album", album.title, album.description, album.cover_photo_id))
        album_id = self._next_id()
        self.albums[album_id] = Album(
            id=album_id,
            title=album.title,
            description=album.description,
            cover_photo_id=album.cover_photo_id,
        )
        self.album_photos[album_id] = [self.photos[album.cover_photo_id]]
        return album_id

    def add_photo_to_album(self, album_id, photo_id):
        self.calls.append(("add_photo_to_album", album_id, photo_id))
        self.album_photos[album_id].append(self.photos[photo_id])

    def list_album_photos(self, album):
        self.calls.append(("list_album_photos", album.id))
        return list(self.album_photos[album.id])

    def reorder_album_photos(self, album_id, photo_ids):
        self.calls.append(("reorder_album_photos", album_id, list(photo_ids)))
        self.reorders.append((album_id, list(photo_ids)))

    def call_names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_remote():
    return FakeRemote()


@pytest.fixture
def log_records():
    """Every loguru record emitted during the test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def photo_tree(tmp_path):
    """Create empty photo files under tmp_path/data from relative paths."""
    root = tmp_path / "data"
    root.mkdir()

    def make(*relative_paths):
        for rel in relative_paths:
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"\xff\xd8\xff\xe0 not really a jpeg")
        return root

    return make


@pytest.fixture
def write_workbook(tmp_path):
    """Write a names workbook (.xlsx) with the given sheets of raw rows."""

    def write(sheets, name="names.xlsx"):
        path = tmp_path / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet_name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        return Path(path)

    return write
