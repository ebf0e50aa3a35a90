"""Tests for the on-disk photo store."""
import os

import pytest

from app.core.exceptions import FileTooLargeError, InvalidFileTypeError
from app.services.photo_store import PhotoStore, sanitize_filename


def test_save_writes_file_and_returns_generated_name(photo_store, png_bytes):
    filename = photo_store.save(png_bytes, "foto equipo.png", "image/png")

    assert filename.endswith("-foto_equipo.png")
    assert photo_store.exists(filename)
    with open(os.path.join(photo_store.directory, filename), "rb") as f:
        assert f.read() == png_bytes


def test_two_saves_with_same_name_do_not_collide(photo_store, png_bytes):
    first = photo_store.save(png_bytes, "a.png", "image/png")
    second = photo_store.save(png_bytes, "a.png", "image/png")
    assert first != second
    assert photo_store.exists(first) and photo_store.exists(second)


def test_rejects_non_image_mime_type(photo_store):
    with pytest.raises(InvalidFileTypeError):
        photo_store.save(b"hello", "notes.txt", "text/plain")
    assert os.listdir(photo_store.directory) == []


def test_rejects_bytes_that_are_not_an_image(photo_store):
    with pytest.raises(InvalidFileTypeError):
        photo_store.save(b"definitely not a png", "fake.png", "image/png")


def test_rejects_payload_over_limit(tmp_path, png_bytes):
    store = PhotoStore(str(tmp_path), max_size=5 * 1024 * 1024)
    with pytest.raises(FileTooLargeError):
        store.save(png_bytes + b"\0" * (5 * 1024 * 1024), "big.png", "image/png")


def test_url_for_is_deterministic(photo_store):
    assert photo_store.url_for("123-abc.png") == "/uploads/123-abc.png"
    assert photo_store.url_for("123-abc.png") == photo_store.url_for("123-abc.png")


def test_delete_missing_file_is_not_an_error(photo_store, png_bytes):
    filename = photo_store.save(png_bytes, "a.png", "image/png")
    assert photo_store.delete(filename) is True
    assert photo_store.delete(filename) is False


@pytest.mark.parametrize("name, expected", [
    ("../../etc/passwd", "passwd"),
    ("C:\\fotos\\mesa 5.jpg", "mesa_5.jpg"),
    ("", "photo"),
    (None, "photo"),
])
def test_sanitize_filename(name, expected):
    assert sanitize_filename(name) == expected
