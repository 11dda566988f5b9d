import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from upload_worker.domain.exceptions import MalformedRequest, ResourceCleanupFailed
from upload_worker.domain.image_resource import TempFileImageResource
from upload_worker.domain.interfaces.infrastructure_interfaces import (
    IImageUploader,
    IResponseSender,
)
from upload_worker.schemas.upload_schema import UploadOutcome, UploadRequest
from upload_worker.services.request_decoder import RequestDecoder
from upload_worker.services.response_publisher import (
    ResponsePublisher,
    build_failure_outcome,
    build_success_outcome,
)
from upload_worker.services.upload_executor import UploadExecutor
from upload_worker.utils.logger import get_logger
from upload_worker.utils.temp_files import delete_temp_file


class UploadRequestProcessor:
    """Handles one upload request message: decode, upload, respond, clean up.

    ``on_message`` never raises. A malformed message is logged and dropped
    without a response; every accepted request gets exactly one response and
    exactly one deletion of its temporary file.
    """

    def __init__(
        self,
        uploader: IImageUploader,
        sender: IResponseSender,
        logger: logging.Logger | None = None,
        deleter: Callable[[Path], None] = delete_temp_file,
    ):
        self.logger = logger or get_logger("upload_worker.upload_request_processor")
        self._decoder = RequestDecoder()
        self._executor = UploadExecutor(uploader, logger=self.logger)
        self._publisher = ResponsePublisher(sender, logger=self.logger)
        self._deleter = deleter

    def on_message(
        self, raw_message: bytes | str | Mapping[str, Any]
    ) -> UploadOutcome | None:
        try:
            return self._process_message(raw_message)
        except Exception as e:
            self.logger.exception(
                f"{type(self).__name__}.on_message failed: {e}"
            )
            return None

    # ------------------------------------------------------------------
    def _process_message(
        self, raw_message: bytes | str | Mapping[str, Any]
    ) -> UploadOutcome | None:
        try:
            request = self._decoder.decode(raw_message)
        except MalformedRequest as e:
            self.logger.error(f"Dropping upload request: {e.message}")
            return None

        return self._process_request(request)

    def _process_request(self, request: UploadRequest) -> UploadOutcome:
        try:
            with self._staged_resource(request) as resource:
                result = self._executor.execute(
                    request.resource_type, resource, request.profile_id
                )
        except Exception as e:
            self.logger.error(f"Image uploading failed: {e}", exc_info=e)
            outcome = build_failure_outcome(
                request.profile_id, request.resource_type, request.temp_path, e
            )
        else:
            outcome = build_success_outcome(
                request.profile_id, request.resource_type, request.temp_path, result
            )

        self._publisher.publish(outcome)
        return outcome

    @contextmanager
    def _staged_resource(
        self, request: UploadRequest
    ) -> Iterator[TempFileImageResource]:
        resource = TempFileImageResource(request.temp_path, self._deleter)
        try:
            yield resource
        finally:
            try:
                resource.close()
            except ResourceCleanupFailed as e:
                self.logger.warning(e.message)
            except Exception as e:
                self.logger.exception(
                    f"Unexpected error deleting {request.temp_path}: {e}"
                )
