import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Sequence, Tuple

import requests

from albumsync.config import ALBUM_PAGE_SIZE, REQUEST_TIMEOUT, REST_URL, UPLOAD_TIMEOUT, UPLOAD_URL
from albumsync.errors import RemoteOperationError, TransientUploadError

WRITE_METHODS = {
    "flickr.photosets.editMeta",
    "flickr.photosets.reorderPhotos",
    "flickr.photosets.create",
    "flickr.photosets.addPhoto",
    "flickr.photos.setMeta",
    "flickr.photos.addTags",
}


def call(creds, method: str, **params) -> dict:
    """
    Call one REST method and return the decoded JSON body.
    Raises RemoteOperationError on HTTP errors and stat=fail responses.
    """
    params = {"method": method, "format": "json", "nojsoncallback": 1, **params}
    if method in WRITE_METHODS:
        resp = requests.post(REST_URL, data=params, auth=creds.auth(), timeout=REQUEST_TIMEOUT)
    else:
        resp = requests.get(REST_URL, params=params, auth=creds.auth(), timeout=REQUEST_TIMEOUT)
    if resp.status_code != 200:
        raise RemoteOperationError(f"{method} failed: {resp.status_code} {resp.text}")

    data = resp.json()
    if data.get("stat") != "ok":
        raise RemoteOperationError(f"{method} failed: {data.get('message', 'unknown error')}", data.get("code"))
    return data


def tag_string(tags: Sequence[str]) -> str:
    """Flickr tag syntax: space separated, quoted so multi-word tags survive."""
    return " ".join(f'"{t}"' for t in tags)


def test_login(creds) -> str:
    """Return the NSID of the user the token belongs to."""
    return call(creds, "flickr.test.login")["user"]["id"]


def search_photos(creds, user_id: str, per_page: int = 100, page: int = 1, extras: str = "date_upload") -> List[dict]:
    data = call(creds, "flickr.photos.search", user_id=user_id, per_page=per_page, page=page, extras=extras)
    return data["photos"]["photo"]


def list_albums(creds, user_id: str) -> List[dict]:
    """
    List all photosets of the user (paginated). Returns a list of photoset dicts.
    """
    albums = []
    page = 1

    while True:
        data = call(creds, "flickr.photosets.getList", user_id=user_id, page=page, per_page=ALBUM_PAGE_SIZE)
        photosets = data["photosets"]
        albums.extend(photosets.get("photoset", []))

        if page >= int(photosets.get("pages", 1)):
            break
        page += 1

    return albums


def get_album_info(creds, album_id: str) -> dict:
    return call(creds, "flickr.photosets.getInfo", photoset_id=album_id)["photoset"]


def edit_album_meta(creds, album_id: str, title: str, description: str):
    call(creds, "flickr.photosets.editMeta", photoset_id=album_id, title=title, description=description)


def list_album_photos(creds, album_id: str) -> Tuple[List[dict], int]:
    """
    First page of an album's photos, with upload dates.
    Returns (photos, total number of pages).
    """
    data = call(
        creds,
        "flickr.photosets.getPhotos",
        photoset_id=album_id,
        extras="date_upload",
        per_page=ALBUM_PAGE_SIZE,
    )
    photoset = data["photoset"]
    return photoset.get("photo", []), int(photoset.get("pages", 1))


def reorder_album_photos(creds, album_id: str, photo_ids: Sequence[str]):
    call(creds, "flickr.photosets.reorderPhotos", photoset_id=album_id, photo_ids=",".join(photo_ids))


def create_album(creds, title: str, description: str, cover_photo_id: str) -> str:
    data = call(
        creds,
        "flickr.photosets.create",
        title=title,
        description=description,
        primary_photo_id=cover_photo_id,
    )
    return data["photoset"]["id"]


def add_photo_to_album(creds, album_id: str, photo_id: str):
    call(creds, "flickr.photosets.addPhoto", photoset_id=album_id, photo_id=photo_id)


def get_photo_info(creds, photo_id: str) -> dict:
    return call(creds, "flickr.photos.getInfo", photo_id=photo_id)["photo"]


def set_photo_meta(creds, photo_id: str, title: str, description: str):
    call(creds, "flickr.photos.setMeta", photo_id=photo_id, title=title, description=description)


def add_photo_tags(creds, photo_id: str, tags: Sequence[str]):
    call(creds, "flickr.photos.addTags", photo_id=photo_id, tags=tag_string(tags))


def get_photo_contexts(creds, photo_id: str) -> List[dict]:
    """Albums (photosets) the photo belongs to."""
    return call(creds, "flickr.photos.getAllContexts", photo_id=photo_id).get("set", [])


def upload_photo(creds, file_path: Path, title: str, description: str, tags: Sequence[str]) -> str:
    """
    Upload a local file with its metadata. Returns the new photo id.

    A dropped or truncated transfer raises TransientUploadError so the
    caller can try again; anything Flickr itself rejects is a
    RemoteOperationError.
    """
    fields = {"title": title, "description": description, "tags": tag_string(tags)}
    try:
        with open(file_path, "rb") as f:
            # Fields go in the query string so they are part of the OAuth signature.
            resp = requests.post(
                UPLOAD_URL,
                params=fields,
                files={"photo": (Path(file_path).name, f)},
                auth=creds.auth(),
                timeout=UPLOAD_TIMEOUT,
            )
    except (requests.ConnectionError, requests.Timeout, requests.exceptions.ChunkedEncodingError) as e:
        raise TransientUploadError(f"Upload of {file_path} interrupted: {e}") from e

    if resp.status_code != 200:
        raise RemoteOperationError(f"Upload failed: {resp.status_code} {resp.text}")

    try:
        rsp = ET.fromstring(resp.text)
    except ET.ParseError as e:
        # A cut-off response body looks like a truncated transfer.
        raise TransientUploadError(f"Unreadable upload response for {file_path}: {e}") from e

    if rsp.get("stat") != "ok":
        err = rsp.find("err")
        message = err.get("msg") if err is not None else "unknown error"
        code = int(err.get("code")) if err is not None and err.get("code") else None
        raise RemoteOperationError(f"Upload of {file_path} rejected: {message}", code)
    photo_id = (rsp.findtext("photoid") or "").strip()
    if not photo_id:
        raise RemoteOperationError(f"Upload of {file_path} returned no photo id")
    return photo_id
