import mimetypes
import uuid
from typing import Dict

from minio import Minio

from upload_worker.core.config import settings
from upload_worker.domain.image_resource import TempFileImageResource
from upload_worker.domain.interfaces.infrastructure_interfaces import IImageUploader
from upload_worker.utils.logger import get_logger

logger = get_logger("upload_worker.external_storage")


class MinioClient:
    """Singleton helper for bucket uploads and public URLs."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            secure = settings.storage.minio_use_ssl
            endpoint = settings.storage.minio_endpoint

            # Remove protocol prefix if present
            if endpoint.startswith("http://"):
                endpoint = endpoint[7:]
                secure = False
            elif endpoint.startswith("https://"):
                endpoint = endpoint[8:]
                secure = True

            client = Minio(
                endpoint,
                access_key=settings.storage.minio_access_key,
                secret_key=settings.storage.minio_secret_key,
                secure=secure,
            )
            # create bucket if not exists
            found = client.bucket_exists(settings.storage.minio_bucket)
            if not found:
                client.make_bucket(settings.storage.minio_bucket)
                logger.info(f"Created bucket {settings.storage.minio_bucket}")

            cls._instance = super().__new__(cls)
            cls._instance._client = client
            cls._instance._bucket = settings.storage.minio_bucket
            cls._instance._secure = secure
            cls._instance._endpoint = endpoint
        return cls._instance

    # ------------------------------------------------------------------
    def get_public_url(self, object_name: str) -> str:
        """Get direct public URL for an object when bucket is public.

        Args:
            object_name: The name/path of the object in MinIO

        Returns:
            str: Direct public URL to the object
        """
        endpoint = self._endpoint
        # Standard HTTPS port is implied by the scheme
        if self._secure and endpoint.endswith(":443"):
            endpoint = endpoint[: -len(":443")]
        scheme = "https" if self._secure else "http"
        return f"{scheme}://{endpoint}/{self._bucket}/{object_name}"

    def upload_path(self, object_name: str, resource: TempFileImageResource) -> None:
        """Upload a staged file to MinIO storage.

        Args:
            object_name: The name/path of the object in MinIO
            resource: Staged image to read from
        """
        content_type, _ = mimetypes.guess_type(resource.path.name)
        self._client.fput_object(
            bucket_name=self._bucket,
            object_name=object_name,
            file_path=str(resource.path),
            content_type=content_type or "application/octet-stream",
        )
        logger.debug(f"Uploaded {resource.path} to {self._bucket}/{object_name}")


class MinioImageUploader(IImageUploader):
    """Stores staged photos and avatars in a public MinIO bucket.

    Only the original is stored; the small and large photo URLs carry width
    hints for the resizing proxy in front of the bucket.
    """

    SMALL_WIDTH = 250
    LARGE_WIDTH = 1024

    def __init__(self, client: MinioClient | None = None):
        self._minio = client or MinioClient()

    def upload_photo(self, resource: TempFileImageResource) -> Dict[str, str]:
        object_name = self._object_name(settings.storage.photo_prefix, resource)
        self._minio.upload_path(object_name, resource)

        original_url = self._minio.get_public_url(object_name)
        return {
            "small_url": f"{original_url}?width={self.SMALL_WIDTH}",
            "large_url": f"{original_url}?width={self.LARGE_WIDTH}",
            "original_url": original_url,
        }

    def upload_avatar(self, resource: TempFileImageResource) -> str:
        object_name = self._object_name(settings.storage.avatar_prefix, resource)
        self._minio.upload_path(object_name, resource)
        return self._minio.get_public_url(object_name)

    @staticmethod
    def _object_name(prefix: str, resource: TempFileImageResource) -> str:
        # Generate file extension from the staged filename
        file_extension = resource.path.suffix.lstrip(".").lower() or "jpg"
        return f"{prefix}/{uuid.uuid4().hex}.{file_extension}"
