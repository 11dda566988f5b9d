"""Unit tests for UploadExecutor - dispatch on resource type."""

from types import SimpleNamespace

import pytest

from upload_worker.core.constants import ImageResourceType
from upload_worker.domain.exceptions import UploadFailed
from upload_worker.domain.image_resource import TempFileImageResource
from upload_worker.schemas.upload_schema import AvatarResult, PhotoResult
from upload_worker.services.upload_executor import UploadExecutor


class StorageUnavailable(Exception):
    pass


class TestUploadExecutor:
    """Test suite for UploadExecutor."""

    @pytest.fixture
    def executor(self, mock_uploader):
        return UploadExecutor(mock_uploader)

    @pytest.fixture
    def resource(self, staged_file):
        return TempFileImageResource(staged_file)

    def test_photo_upload(self, executor, mock_uploader, resource):
        result = executor.execute(ImageResourceType.PHOTO, resource, 42)

        assert result == PhotoResult(
            small_url="s.jpg", large_url="l.jpg", original_url="o.jpg"
        )
        mock_uploader.upload_photo.assert_called_once_with(resource)
        mock_uploader.upload_avatar.assert_not_called()

    def test_photo_upload_from_object(self, executor, mock_uploader, resource):
        mock_uploader.upload_photo.return_value = SimpleNamespace(
            small_url="s.jpg", large_url="l.jpg", original_url="o.jpg"
        )

        result = executor.execute(ImageResourceType.PHOTO, resource, 42)

        assert result.original_url == "o.jpg"

    def test_avatar_upload(self, executor, mock_uploader, resource):
        result = executor.execute(ImageResourceType.AVATAR, resource, 42)

        assert result == AvatarResult(
            avatar_url="https://cdn.example.com/avatars/42.jpg", profile_id=42
        )
        mock_uploader.upload_avatar.assert_called_once_with(resource)
        mock_uploader.upload_photo.assert_not_called()

    def test_executor_does_not_release_resource(self, executor, resource, staged_file):
        executor.execute(ImageResourceType.PHOTO, resource, 42)

        assert staged_file.exists()
        assert not resource.closed

    def test_uploader_error_wrapped(self, executor, mock_uploader, resource):
        cause = StorageUnavailable("bucket offline")
        mock_uploader.upload_photo.side_effect = cause

        with pytest.raises(UploadFailed) as exc_info:
            executor.execute(ImageResourceType.PHOTO, resource, 42)

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.resource_type == "IMAGE_RESOURCE_PHOTO"
        mock_uploader.upload_photo.assert_called_once()

    def test_incomplete_photo_result_wrapped(self, executor, mock_uploader, resource):
        mock_uploader.upload_photo.return_value = {"small_url": "s.jpg"}

        with pytest.raises(UploadFailed):
            executor.execute(ImageResourceType.PHOTO, resource, 42)

    def test_avatar_error_wrapped(self, executor, mock_uploader, resource):
        mock_uploader.upload_avatar.side_effect = OSError("disk")

        with pytest.raises(UploadFailed) as exc_info:
            executor.execute(ImageResourceType.AVATAR, resource, 7)

        assert exc_info.value.resource_type == "IMAGE_RESOURCE_AVATAR"
