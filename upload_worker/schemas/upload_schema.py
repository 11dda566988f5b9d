from typing import Annotated, Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from upload_worker.core.constants import ImageResourceType, MessageProperty
from upload_worker.domain.exceptions import DomainException, UploadFailed


class UploadRequest(BaseModel):
    resource_type: ImageResourceType
    temp_path: str
    profile_id: int
    model_config = ConfigDict(frozen=True)


class PhotoResult(BaseModel):
    kind: Literal["photo"] = "photo"
    small_url: str
    large_url: str
    original_url: str
    model_config = ConfigDict(from_attributes=True, frozen=True)


class AvatarResult(BaseModel):
    kind: Literal["avatar"] = "avatar"
    avatar_url: str
    profile_id: int
    model_config = ConfigDict(frozen=True)


class UploadErrorDetail(BaseModel):
    kind: Literal["error"] = "error"
    error_type: str
    message: str
    error_code: str | None = None
    cause_type: str | None = None
    cause_message: str | None = None

    @classmethod
    def from_exception(cls, error: BaseException) -> "UploadErrorDetail":
        cause = error.cause if isinstance(error, UploadFailed) else error.__cause__
        return cls(
            error_type=type(error).__name__,
            message=str(error),
            error_code=error.error_code
            if isinstance(error, DomainException)
            else None,
            cause_type=type(cause).__name__ if cause is not None else None,
            cause_message=str(cause) if cause is not None else None,
        )


class UploadOutcome(BaseModel):
    success: bool
    profile_id: int
    resource_type: ImageResourceType
    temp_path: str
    payload: Annotated[
        Union[PhotoResult, AvatarResult, UploadErrorDetail],
        Field(discriminator="kind"),
    ]

    def headers(self) -> Dict[str, Any]:
        """Correlation attributes carried as message headers."""
        return {
            MessageProperty.REQUEST_SUCCESS.value: self.success,
            MessageProperty.PROFILE_ID.value: self.profile_id,
            MessageProperty.IMAGE_RESOURCE_TYPE.value: self.resource_type.value,
            MessageProperty.IMAGE_RESOURCE_TEMP_PATH.value: self.temp_path,
        }
