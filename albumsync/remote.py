from pathlib import Path
from typing import List, Sequence

from loguru import logger

from albumsync import flickr_api as api
from albumsync.models import Album, RemotePhoto


class FlickrRemote:
    """
    The remote photo service as the sync engine sees it: one account,
    read as immutable Album / RemotePhoto snapshots.
    """

    def __init__(self, creds, user_id: str, log=logger):
        self.creds = creds
        self.user_id = user_id
        self.log = log

    @classmethod
    def connect(cls, creds, log=logger) -> "FlickrRemote":
        user_id = api.test_login(creds)
        log.info("Logged in to Flickr as {}", user_id)
        return cls(creds, user_id, log=log)

    # -----------------------------
    # PHOTOS
    # -----------------------------

    def upload_photo(self, file_path: Path, title: str, description: str, tags: Sequence[str]) -> str:
        return api.upload_photo(self.creds, file_path, title, description, tags)

    def recent(self, num: int) -> List[RemotePhoto]:
        """The `num` most recently uploaded photos of this account."""
        photos = api.search_photos(self.creds, self.user_id, per_page=num)
        return [RemotePhoto.from_remote(p) for p in photos[:num]]

    def photo(self, photo_id: str) -> RemotePhoto:
        return RemotePhoto.from_remote(api.get_photo_info(self.creds, photo_id))

    def set_photo_title(self, photo: RemotePhoto, title: str) -> RemotePhoto:
        api.set_photo_meta(self.creds, photo.id, title, photo.description)
        return self.photo(photo.id)

    def set_photo_description(self, photo: RemotePhoto, description: str) -> RemotePhoto:
        api.set_photo_meta(self.creds, photo.id, photo.title, description)
        return self.photo(photo.id)

    def add_photo_tags(self, photo: RemotePhoto, tags: Sequence[str]) -> RemotePhoto:
        api.add_photo_tags(self.creds, photo.id, tags)
        return self.photo(photo.id)

    def photo_albums(self, photo_id: str) -> List[Album]:
        return [Album.from_remote(s) for s in api.get_photo_contexts(self.creds, photo_id)]

    # -----------------------------
    # ALBUMS
    # -----------------------------

    def list_albums(self) -> List[Album]:
        return [Album.from_remote(a) for a in api.list_albums(self.creds, self.user_id)]

    def album(self, album_id: str) -> Album:
        return Album.from_remote(api.get_album_info(self.creds, album_id))

    def set_album_title(self, album: Album, title: str) -> Album:
        api.edit_album_meta(self.creds, album.id, title, album.description)
        return self.album(album.id)

    def set_album_description(self, album: Album, description: str) -> Album:
        api.edit_album_meta(self.creds, album.id, album.title, description)
        return self.album(album.id)

    def create_album(self, album: Album) -> str:
        """Create an album from a local Album.from_fields(...) value; returns its id."""
        return api.create_album(self.creds, album.title, album.description, album.cover_photo_id)

    def add_photo_to_album(self, album_id: str, photo_id: str):
        api.add_photo_to_album(self.creds, album_id, photo_id)

    def list_album_photos(self, album: Album) -> List[RemotePhoto]:
        """
        Photos of the album, first page only. Albums bigger than one page
        are reordered by their first page alone, so say so.
        """
        photos, pages = api.list_album_photos(self.creds, album.id)
        if pages > 1:
            self.log.warning(
                "Album '{}' has {} pages of photos; only the first one is considered",
                album.title,
                pages,
            )
        return [RemotePhoto.from_remote(p) for p in photos]

    def reorder_album_photos(self, album_id: str, photo_ids: Sequence[str]):
        api.reorder_album_photos(self.creds, album_id, photo_ids)
