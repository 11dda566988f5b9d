import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from upload_worker.domain.interfaces.infrastructure_interfaces import (
    IImageUploader,
    IResponseSender,
)


@pytest.fixture
def staged_file(tmp_path: Path) -> Path:
    """A staged temporary image, as left behind by the web tier."""
    path = tmp_path / "x.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    return path


@pytest.fixture
def mock_uploader():
    """Uploader returning fixed photo and avatar URLs."""
    uploader = Mock(spec=IImageUploader)
    uploader.upload_photo.return_value = {
        "small_url": "s.jpg",
        "large_url": "l.jpg",
        "original_url": "o.jpg",
    }
    uploader.upload_avatar.return_value = "https://cdn.example.com/avatars/42.jpg"
    return uploader


@pytest.fixture
def mock_sender():
    """Response sender recording what would go on the wire."""
    sender = Mock(spec=IResponseSender)
    sender.destination = "upload_response_queue"
    return sender


@pytest.fixture
def mock_logger():
    return Mock()


def make_request_body(path, profile_id=42, resource_type="IMAGE_RESOURCE_PHOTO") -> bytes:
    return json.dumps(
        {
            "IMAGE_RESOURCE_TEMP_PATH": str(path),
            "PROFILE_ID": profile_id,
            "IMAGE_RESOURCE_TYPE": resource_type,
        }
    ).encode("utf-8")


@pytest.fixture
def request_body():
    return make_request_body
