from pathlib import Path
from typing import List

from albumsync.config import IMAGE_EXTENSIONS
from albumsync.metadata import MetadataCatalog
from albumsync.models import DiscoveredPhoto, InvalidPhotoRecord, PhotoRecord


def find_photo_files(directory: Path) -> List[Path]:
    """
    Files laid out as <birdCode>/<tagCode>/<name>.jpg|jpeg (any case),
    exactly two directories below `directory`. Hidden files and
    directories (dotfiles, ._ AppleDouble files) are skipped.
    """
    directory = Path(directory)
    files = [
        p for p in directory.glob("*/*/*")
        if p.is_file()
        and p.suffix.lower() in IMAGE_EXTENSIONS
        and not any(part.startswith(".") for part in p.relative_to(directory).parts)
    ]
    return sorted(files)


def classify(path: Path, directory: Path, catalog: MetadataCatalog) -> DiscoveredPhoto:
    bird_code, tag_code = path.relative_to(directory).parts[:2]

    taxon = catalog.taxon(bird_code)
    if taxon is None:
        return InvalidPhotoRecord(path, f"Could not find bird data for {bird_code}")

    tags = catalog.tags(tag_code)
    if not tags:
        return InvalidPhotoRecord(path, f"Could not find tags for {tag_code}")

    record = PhotoRecord.build(path, taxon, tags)
    if not record.is_complete():
        return InvalidPhotoRecord(path, f"Incomplete metadata for {bird_code}/{tag_code}")
    return record


def discover(directory: Path, catalog: MetadataCatalog) -> List[DiscoveredPhoto]:
    """Classify every photo under `directory` against the catalog. Local only."""
    directory = Path(directory)
    return [classify(path, directory, catalog) for path in find_photo_files(directory)]
