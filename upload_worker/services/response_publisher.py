import logging

from upload_worker.core.constants import ImageResourceType
from upload_worker.domain.exceptions import PublishFailed
from upload_worker.domain.interfaces.infrastructure_interfaces import IResponseSender
from upload_worker.schemas.upload_schema import (
    AvatarResult,
    PhotoResult,
    UploadErrorDetail,
    UploadOutcome,
)
from upload_worker.utils.logger import get_logger


def build_success_outcome(
    profile_id: int,
    resource_type: ImageResourceType,
    temp_path: str,
    result: PhotoResult | AvatarResult,
) -> UploadOutcome:
    return UploadOutcome(
        success=True,
        profile_id=profile_id,
        resource_type=resource_type,
        temp_path=temp_path,
        payload=result,
    )


def build_failure_outcome(
    profile_id: int,
    resource_type: ImageResourceType,
    temp_path: str,
    error: BaseException,
) -> UploadOutcome:
    return UploadOutcome(
        success=False,
        profile_id=profile_id,
        resource_type=resource_type,
        temp_path=temp_path,
        payload=UploadErrorDetail.from_exception(error),
    )


class ResponsePublisher:
    """Publishes upload outcomes to the response channel.

    Responses are sent non-persistent: losing one only hides the status of an
    attempt that has already finished, so a failed send is logged and dropped.
    """

    def __init__(self, sender: IResponseSender, logger: logging.Logger | None = None):
        self._sender = sender
        self.logger = logger or get_logger("upload_worker.response_publisher")

    def publish_success(
        self,
        profile_id: int,
        resource_type: ImageResourceType,
        temp_path: str,
        result: PhotoResult | AvatarResult,
    ) -> bool:
        return self.publish(
            build_success_outcome(profile_id, resource_type, temp_path, result)
        )

    def publish_failure(
        self,
        profile_id: int,
        resource_type: ImageResourceType,
        temp_path: str,
        error: BaseException,
    ) -> bool:
        return self.publish(
            build_failure_outcome(profile_id, resource_type, temp_path, error)
        )

    def publish(self, outcome: UploadOutcome) -> bool:
        try:
            self._sender.send(
                outcome.model_dump_json().encode("utf-8"),
                outcome.headers(),
                persistent=False,
            )
        except Exception as e:
            failure = PublishFailed(self._sender.destination, e)
            self.logger.error(
                f"{failure.message} (profile {outcome.profile_id}, "
                f"success={outcome.success})"
            )
            return False

        self.logger.debug(
            f"Published {'success' if outcome.success else 'failure'} response "
            f"for profile {outcome.profile_id} to {self._sender.destination}"
        )
        return True
