from typing import Dict, List, Optional, Sequence

from loguru import logger

from albumsync.album_index import AlbumIndex
from albumsync.config import MAX_UPLOAD_ATTEMPTS
from albumsync.errors import RemoteOperationError, TransientUploadError
from albumsync.models import Album, PhotoRecord, RemotePhoto, SyncReport


def order_by_upload_day(photos: Sequence[RemotePhoto]) -> List[RemotePhoto]:
    """
    Newest upload day first; photos uploaded on the same day keep their
    current relative order.
    """
    ranked = sorted(
        enumerate(photos),
        key=lambda pair: (pair[1].upload_day, -pair[0]),
    )
    return [photo for _, photo in reversed(ranked)]


class RemoteSyncEngine:
    """
    Uploads validated photos one at a time and files each one into the
    album named after its species, creating the album when needed.
    Every album that got a new photo is reordered once at the end.
    """

    def __init__(self, remote, log=logger, max_attempts: int = MAX_UPLOAD_ATTEMPTS):
        self.remote = remote
        self.log = log
        self.max_attempts = max_attempts

    def run(self, records: Sequence[PhotoRecord], album_index: AlbumIndex) -> SyncReport:
        report = SyncReport()
        # Insertion-ordered set of album titles.
        touched: Dict[str, None] = {}

        for record in records:
            photo_id = self.upload_with_retry(record)
            if photo_id is None:
                report.skipped.append(record)
                continue
            report.uploaded.append((record, photo_id))

            album = album_index.get(record.title)
            if album is not None:
                self.log.debug("ADD_TO_ALBUM {} {}", album.title, photo_id)
                self.remote.add_photo_to_album(album.id, photo_id)
            else:
                self.log.debug("CREATE_ALBUM {}", record.title)
                new_album = Album.from_fields(record.title, record.album_description, photo_id)
                self.remote.create_album(new_album)
                album_index.refresh()
                report.created_albums.append(record.title)
            touched[record.title] = None

        for title in touched:
            self.reorder(album_index, title)
            report.reordered_albums.append(title)

        return report

    def upload_with_retry(self, record: PhotoRecord) -> Optional[str]:
        """
        Upload one photo, retrying interrupted transfers. Returns the new
        photo id, or None when every attempt failed.
        """
        self.log.debug("UPLOAD {} {}", record.filename, record.title)
        for attempt in range(1, self.max_attempts + 1):
            try:
                photo_id = self.remote.upload_photo(record.filename, record.title, record.description, record.tags)
            except TransientUploadError as e:
                self.log.warning("Upload failed, retrying... ({}/{}): {}", attempt, self.max_attempts, e)
                continue
            self.log.debug("UPLOADED_AS {}", photo_id)
            return photo_id

        self.log.error("Unable to upload photo {}, tried {} times...", record.filename, self.max_attempts)
        return None

    def reorder(self, album_index: AlbumIndex, title: str):
        album = album_index.get(title)
        if album is None:
            raise RemoteOperationError(f"Album '{title}' disappeared before it could be reordered")

        self.log.debug("REORDER_ALBUM {}", title)
        photos = self.remote.list_album_photos(album)
        ordered = order_by_upload_day(photos)
        self.remote.reorder_album_photos(album.id, [p.id for p in ordered])
