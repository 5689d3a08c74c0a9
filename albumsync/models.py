"""
Value types shared by the catalog, discovery, validation and sync steps.

Local records (TaxonEntry, PhotoRecord, InvalidPhotoRecord) are built once
and never changed. Remote snapshots (Album, RemotePhoto) describe what
Flickr returned at one point in time; editing something on Flickr gives you
a new snapshot instead of patching the old one.
"""

import datetime
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

SCIENTIFIC_NAME_RE = re.compile(r"^Scientific name: (.*)$", re.MULTILINE)
ORIGINAL_FILE_RE = re.compile(r"^Original file: (.*)$", re.MULTILINE)


def _content(value) -> str:
    """Flickr wraps most text fields as {"_content": ...}; list calls often don't."""
    if isinstance(value, dict):
        return value.get("_content", "") or ""
    return value or ""


def _match(pattern, text: str) -> Optional[str]:
    m = pattern.search(text or "")
    return m.group(1) if m else None


def album_description(latin: str) -> str:
    return f"Scientific name: {latin}\n"


@dataclass(frozen=True)
class TaxonEntry:
    code: str
    swedish: str
    english: str
    latin: str


@dataclass(frozen=True)
class PhotoRecord:
    filename: Path
    swedish: str
    english: str
    latin: str
    tags: Tuple[str, ...]

    @classmethod
    def build(cls, filename: Path, taxon: TaxonEntry, tag_set) -> "PhotoRecord":
        tags = (taxon.swedish, taxon.english) + tuple(tag_set) + (taxon.latin,)
        return cls(
            filename=Path(filename),
            swedish=taxon.swedish,
            english=taxon.english,
            latin=taxon.latin,
            tags=tags,
        )

    @property
    def title(self) -> str:
        return f"{self.swedish} / {self.english}"

    @property
    def description(self) -> str:
        return f"Scientific name: {self.latin}\nOriginal file: {self.filename.stem}\n"

    @property
    def album_description(self) -> str:
        return album_description(self.latin)

    def is_complete(self) -> bool:
        """Structural check, independent of how the names were looked up."""
        return bool(
            self.swedish
            and self.english
            and self.latin
            and self.tags
            and self.title != " / "
        )


@dataclass(frozen=True)
class InvalidPhotoRecord:
    filename: Path
    error: str


DiscoveredPhoto = Union[PhotoRecord, InvalidPhotoRecord]


@dataclass(frozen=True)
class Album:
    """A Flickr photoset. `id` is None until the album has been created."""

    title: str
    id: Optional[str] = None
    description: str = ""
    cover_photo_id: Optional[str] = None
    photo_count: int = 0

    @classmethod
    def from_remote(cls, data: dict) -> "Album":
        return cls(
            id=str(data["id"]),
            title=_content(data.get("title")),
            description=_content(data.get("description")),
            cover_photo_id=data.get("primary"),
            photo_count=int(data.get("photos", 0) or 0),
        )

    @classmethod
    def from_fields(cls, title: str, description: str, cover_photo_id: str) -> "Album":
        return cls(title=title, description=description, cover_photo_id=cover_photo_id)

    @property
    def scientific_name(self) -> Optional[str]:
        return _match(SCIENTIFIC_NAME_RE, self.description)


@dataclass(frozen=True)
class RemotePhoto:
    id: str
    title: str = ""
    description: str = ""
    tags: Tuple[str, ...] = ()
    date_upload: Optional[int] = None
    date_taken: Optional[str] = None

    @classmethod
    def from_remote(cls, data: dict) -> "RemotePhoto":
        """
        Accepts both list entries (photosets.getPhotos, photos.search, with
        the date_upload/date_taken extras) and photos.getInfo payloads.
        """
        dates = data.get("dates", {})
        date_upload = data.get("dateupload", dates.get("posted"))
        date_taken = data.get("datetaken", dates.get("taken"))

        tags = data.get("tags", ())
        if isinstance(tags, dict):
            tags = tuple(t.get("raw", t.get("_content", "")) for t in tags.get("tag", []))
        elif isinstance(tags, str):
            tags = tuple(tags.split())

        return cls(
            id=str(data["id"]),
            title=_content(data.get("title")),
            description=_content(data.get("description")),
            tags=tuple(tags),
            date_upload=int(date_upload) if date_upload is not None else None,
            date_taken=date_taken,
        )

    @property
    def uploaded_at(self) -> Optional[datetime.datetime]:
        if self.date_upload is None:
            return None
        return datetime.datetime.fromtimestamp(self.date_upload)

    @property
    def upload_day(self) -> str:
        """Calendar day of the upload, as YYYY-MM-DD (empty if unknown)."""
        uploaded = self.uploaded_at
        return uploaded.strftime("%Y-%m-%d") if uploaded else ""

    @property
    def taken_at(self) -> Optional[datetime.datetime]:
        if not self.date_taken:
            return None
        return datetime.datetime.strptime(self.date_taken, "%Y-%m-%d %H:%M:%S")

    @property
    def scientific_name(self) -> Optional[str]:
        return _match(SCIENTIFIC_NAME_RE, self.description)

    @property
    def original_file(self) -> Optional[str]:
        return _match(ORIGINAL_FILE_RE, self.description)


@dataclass
class SyncReport:
    uploaded: List[Tuple[PhotoRecord, str]] = field(default_factory=list)
    skipped: List[PhotoRecord] = field(default_factory=list)
    created_albums: List[str] = field(default_factory=list)
    reordered_albums: List[str] = field(default_factory=list)
