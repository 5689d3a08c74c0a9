from albumsync import remote as remote_module
from albumsync.models import Album, RemotePhoto
from albumsync.remote import FlickrRemote


def test_connect_resolves_user(monkeypatch):
    monkeypatch.setattr(remote_module.api, "test_login", lambda creds: "123@N01")
    remote = FlickrRemote.connect(object())
    assert remote.user_id == "123@N01"


def test_multi_page_album_logs_warning(monkeypatch, log_records):
    monkeypatch.setattr(
        remote_module.api,
        "list_album_photos",
        lambda creds, album_id: ([{"id": "1", "dateupload": "100"}], 2),
    )
    remote = FlickrRemote(object(), "me")
    photos = remote.list_album_photos(Album(id="42", title="Kråka / Crow"))

    assert photos == [RemotePhoto(id="1", date_upload=100)]
    [warning] = [r for r in log_records if r["level"].name == "WARNING"]
    assert "Kråka / Crow" in warning["message"]


def test_setters_return_fresh_snapshot(monkeypatch):
    edits = []
    info = {"id": "42", "title": {"_content": "Old"}, "description": {"_content": "Scientific name: Pica pica\n"}}

    def edit_album_meta(creds, album_id, title, description):
        edits.append((album_id, title, description))
        info["title"] = {"_content": title}

    monkeypatch.setattr(remote_module.api, "edit_album_meta", edit_album_meta)
    monkeypatch.setattr(remote_module.api, "get_album_info", lambda creds, album_id: dict(info))

    remote = FlickrRemote(object(), "me")
    before = remote.album("42")
    after = remote.set_album_title(before, "Skata / Magpie")

    assert edits == [("42", "Skata / Magpie", "Scientific name: Pica pica\n")]
    assert before.title == "Old"
    assert after.title == "Skata / Magpie"


def test_add_photo_tags_refetches(monkeypatch):
    monkeypatch.setattr(remote_module.api, "add_photo_tags", lambda creds, photo_id, tags: None)
    monkeypatch.setattr(
        remote_module.api,
        "get_photo_info",
        lambda creds, photo_id: {"id": photo_id, "tags": {"tag": [{"raw": "forest"}]}},
    )
    remote = FlickrRemote(object(), "me")
    photo = remote.add_photo_tags(RemotePhoto(id="7"), ["forest"])
    assert photo.tags == ("forest",)


def test_recent_and_photo_albums(monkeypatch):
    monkeypatch.setattr(
        remote_module.api,
        "search_photos",
        lambda creds, user_id, per_page: [{"id": "3"}, {"id": "2"}, {"id": "1"}],
    )
    monkeypatch.setattr(
        remote_module.api,
        "get_photo_contexts",
        lambda creds, photo_id: [{"id": "42", "title": "Kråka / Crow"}],
    )
    remote = FlickrRemote(object(), "me")
    assert [p.id for p in remote.recent(2)] == ["3", "2"]
    assert remote.photo_albums("3") == [Album(id="42", title="Kråka / Crow")]
