# test/conftest.py
import mongomock
import pytest
from fastapi.testclient import TestClient

from config import settings
from database.connection import TRACKS_COLLECTION
from main import create_app


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def tracks_collection(mongo_client):
    return mongo_client[settings.MONGO_DB][TRACKS_COLLECTION]


@pytest.fixture
def upload_dir(tmp_path):
    return str(tmp_path / "uploads")


@pytest.fixture
def client(mongo_client, upload_dir):
    app = create_app(mongo_client=mongo_client, upload_dir=upload_dir)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload_track(client):
    """
    Usage:
      upload_track(title="Song", artist="Artist", album="Album")
    Returns the httpx response of POST /tracks.
    """
    def _upload(title="Song", artist="Artist", album="Album",
                filename="song.mp3", content=b"ID3-fake-audio", content_type="audio/mpeg"):
        data = {"title": title, "artist": artist, "album": album}
        files = {"audioFile": (filename, content, content_type)}
        return client.post("/tracks", data=data, files=files)
    return _upload
