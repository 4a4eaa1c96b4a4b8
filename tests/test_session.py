import base64

import pytest

from vision_cam_chat.errors import EmptySessionError
from vision_cam_chat.session import ImageSession, StoredImage


def test_fetch_before_store_raises():
    session = ImageSession()

    with pytest.raises(EmptySessionError, match="No image has been uploaded yet"):
        session.fetch()


def test_store_then_fetch_returns_same_image():
    session = ImageSession()
    session.store(b"jpeg-bytes", "image/jpeg")

    image = session.fetch()

    assert base64.standard_b64decode(image.payload) == b"jpeg-bytes"
    assert image.mime_type == "image/jpeg"
    assert image.captured_at is not None


def test_second_store_fully_replaces_first():
    session = ImageSession()
    first = session.store(b"first", "image/jpeg")
    session.store(b"second", "image/png")

    image = session.fetch()

    assert base64.standard_b64decode(image.payload) == b"second"
    assert image.mime_type == "image/png"
    assert image.captured_at >= first.captured_at
    assert image is not first


def test_stored_image_immutable():
    image = ImageSession().store(b"bytes", "image/jpeg")

    with pytest.raises(Exception):
        image.mime_type = "image/png"


def test_clear_resets_to_empty():
    session = ImageSession()
    session.store(b"bytes", "image/jpeg")
    session.clear()

    assert session.is_empty
    with pytest.raises(EmptySessionError):
        session.fetch()


def test_sessions_are_independent():
    a, b = ImageSession(), ImageSession()
    a.store(b"bytes", "image/jpeg")

    assert isinstance(a.fetch(), StoredImage)
    assert b.is_empty
