"""Infrastructure service interfaces to decouple the worker from concrete implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from upload_worker.domain.image_resource import TempFileImageResource


class IImageUploader(ABC):
    """Interface for the external image upload operations."""

    @abstractmethod
    def upload_photo(self, resource: TempFileImageResource) -> Any:
        """Upload a photo; return an object or mapping with small_url, large_url and original_url."""

    @abstractmethod
    def upload_avatar(self, resource: TempFileImageResource) -> str:
        """Upload a profile avatar and return its URL."""


class IResponseSender(ABC):
    """Interface for the response channel."""

    @property
    @abstractmethod
    def destination(self) -> str:
        """Name of the channel responses are sent to."""

    @abstractmethod
    def send(
        self, body: bytes, headers: Dict[str, Any], persistent: bool = False
    ) -> None:
        """Send one response message. Raises on failure."""
