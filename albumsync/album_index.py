from typing import Dict, Optional

from albumsync.models import Album


class AlbumIndex:
    """
    Existing albums by title. Never patched in place: after creating an
    album, call refresh() so the new album (with its Flickr id) shows up.
    Two albums sharing a title: the one listed last wins.
    """

    def __init__(self, remote):
        self.remote = remote
        self.albums: Dict[str, Album] = {}

    @classmethod
    def fetch(cls, remote) -> "AlbumIndex":
        index = cls(remote)
        index.refresh()
        return index

    def refresh(self):
        self.albums = {album.title: album for album in self.remote.list_albums()}

    def get(self, title: str) -> Optional[Album]:
        return self.albums.get(title)

    def __contains__(self, title: str) -> bool:
        return title in self.albums

    def __len__(self) -> int:
        return len(self.albums)
