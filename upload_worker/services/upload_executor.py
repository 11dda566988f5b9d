import logging

from upload_worker.core.constants import ImageResourceType
from upload_worker.domain.exceptions import UploadFailed
from upload_worker.domain.image_resource import TempFileImageResource
from upload_worker.domain.interfaces.infrastructure_interfaces import IImageUploader
from upload_worker.schemas.upload_schema import AvatarResult, PhotoResult
from upload_worker.utils.logger import get_logger


class UploadExecutor:
    """Runs the upload operation matching a resource type."""

    def __init__(self, uploader: IImageUploader, logger: logging.Logger | None = None):
        self._uploader = uploader
        self.logger = logger or get_logger("upload_worker.upload_executor")

    def execute(
        self,
        resource_type: ImageResourceType,
        resource: TempFileImageResource,
        profile_id: int,
    ) -> PhotoResult | AvatarResult:
        try:
            if resource_type is ImageResourceType.PHOTO:
                return self._upload_photo(resource)
            if resource_type is ImageResourceType.AVATAR:
                return self._upload_avatar(resource, profile_id)
            raise ValueError(f"Unsupported image resource type: {resource_type!r}")
        except Exception as e:
            raise UploadFailed(getattr(resource_type, "value", str(resource_type)), e) from e

    # ------------------------------------------------------------------
    def _upload_photo(self, resource: TempFileImageResource) -> PhotoResult:
        photo = self._uploader.upload_photo(resource)
        result = PhotoResult.model_validate(photo)

        self.logger.info(
            "New photo has been successfully uploaded: "
            f"smallUrl={result.small_url}, largeUrl={result.large_url}, "
            f"originalUrl={result.original_url}"
        )
        return result

    def _upload_avatar(
        self, resource: TempFileImageResource, profile_id: int
    ) -> AvatarResult:
        avatar_url = self._uploader.upload_avatar(resource)
        result = AvatarResult(avatar_url=avatar_url, profile_id=profile_id)

        self.logger.info(
            f"New avatar image {result.avatar_url} has been successfully "
            f"uploaded for profile {profile_id}"
        )
        return result
