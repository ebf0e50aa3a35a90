"""Pytest configuration and fixtures."""
import io

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient
from PIL import Image

from app.config.database import MongoDatabase
from app.config.settings import Settings
from app.factory import create_app
from app.services.photo_store import PhotoStore
from app.services.report_service import ReportService
from app.services.report_store import ReportStore


def make_png(size=(8, 8), color="red") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


VALID_FORM = {
    "title": "Projetor sem ligar",
    "description": "não liga",
    "location": "Mesa 5",
    "laboratory": "Lab 1",
}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        MONGODB_DB="equipment-reports-test",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def database(settings):
    """MongoDatabase sobre un cliente en memoria (mongomock)."""
    return MongoDatabase(settings, client=AsyncMongoMockClient())


@pytest.fixture
def report_store(database):
    return ReportStore(database.equipments)


@pytest.fixture
def photo_store(settings):
    store = PhotoStore(settings.UPLOAD_DIR, settings.UPLOADS_URL_PREFIX, settings.MAX_PHOTO_SIZE)
    store.init_directory()
    return store


@pytest.fixture
def report_service(report_store, photo_store):
    return ReportService(report_store, photo_store)


@pytest.fixture
def client(settings, database):
    app = create_app(settings, database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def valid_form():
    return dict(VALID_FORM)
