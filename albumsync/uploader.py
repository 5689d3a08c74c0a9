from pathlib import Path
from typing import List, Optional

from loguru import logger

from albumsync.album_index import AlbumIndex
from albumsync.auth import AuthManager
from albumsync.config import load_user_config, metadata_path
from albumsync.discovery import discover
from albumsync.metadata import MetadataCatalog, load_catalog
from albumsync.models import PhotoRecord, SyncReport
from albumsync.remote import FlickrRemote
from albumsync.syncer import RemoteSyncEngine
from albumsync.validation import validate


class Uploader:
    """
    Main class orchestrating an upload run:
     - names workbook -> catalog
     - photo tree -> validated records (nothing remote happens if any is invalid)
     - Flickr login
     - upload, file into albums, reorder
    """

    def __init__(self, config: Optional[dict] = None, log=logger):
        self.config = config if config is not None else load_user_config()
        self.log = log
        self.directory = Path(self.config["directory"])

        self.auth_manager = AuthManager(self.config["token_file"])
        self.remote: Optional[FlickrRemote] = None

        self.catalog: Optional[MetadataCatalog] = None
        self.photos: List[PhotoRecord] = []

    def prepare_metadata(self) -> MetadataCatalog:
        self.catalog = load_catalog(metadata_path(self.config), log=self.log)
        return self.catalog

    def check_photos(self) -> List[PhotoRecord]:
        """Raises PhotoValidationError after logging every invalid photo."""
        records = discover(self.directory, self.catalog)
        self.photos = validate(records, log=self.log)
        self.log.info("{} photos ready for upload", len(self.photos))
        return self.photos

    def authenticate(self) -> FlickrRemote:
        creds = self.auth_manager.authenticate()
        self.remote = FlickrRemote.connect(creds, log=self.log)
        return self.remote

    def upload_photos(self) -> SyncReport:
        album_index = AlbumIndex.fetch(self.remote)
        engine = RemoteSyncEngine(self.remote, log=self.log)
        report = engine.run(self.photos, album_index)

        self.log.info(
            "Uploaded {} photos ({} skipped), created {} albums, reordered {} albums",
            len(report.uploaded),
            len(report.skipped),
            len(report.created_albums),
            len(report.reordered_albums),
        )
        for record in report.skipped:
            self.log.warning("Not uploaded: {}", record.filename)
        return report
