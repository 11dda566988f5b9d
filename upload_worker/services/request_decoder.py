import json
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from upload_worker.core.constants import ImageResourceType, MessageProperty
from upload_worker.domain.exceptions import MalformedRequest
from upload_worker.schemas.upload_schema import UploadRequest

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class InboundUploadMessage(BaseModel):
    """Wire shape of an upload request body."""

    temp_path: str = Field(
        ..., alias=MessageProperty.IMAGE_RESOURCE_TEMP_PATH.value, min_length=1
    )
    profile_id: int = Field(
        ..., alias=MessageProperty.PROFILE_ID.value, ge=INT64_MIN, le=INT64_MAX
    )
    resource_type: ImageResourceType = Field(
        ..., alias=MessageProperty.IMAGE_RESOURCE_TYPE.value
    )
    model_config = ConfigDict(extra="ignore")

    @field_validator("temp_path")
    @classmethod
    def validate_temp_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("path is blank")
        return v

    @field_validator("profile_id", mode="before")
    @classmethod
    def reject_bool_profile_id(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("expected an integer, got a boolean")
        return v


class RequestDecoder:
    """Turns an inbound message body into an UploadRequest."""

    def decode(self, raw_message: bytes | str | Mapping[str, Any]) -> UploadRequest:
        fields = self._parse_body(raw_message)
        try:
            message = InboundUploadMessage.model_validate(fields)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "body"
            raise MalformedRequest(field, error["msg"]) from e

        return UploadRequest(
            resource_type=message.resource_type,
            temp_path=message.temp_path,
            profile_id=message.profile_id,
        )

    @staticmethod
    def _parse_body(raw_message: bytes | str | Mapping[str, Any]) -> Mapping[str, Any]:
        if isinstance(raw_message, Mapping):
            return raw_message

        if isinstance(raw_message, (bytes, bytearray)):
            try:
                raw_message = raw_message.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MalformedRequest("body", "not valid UTF-8") from e

        if not isinstance(raw_message, str):
            raise MalformedRequest(
                "body", f"unsupported message type {type(raw_message).__name__}"
            )

        try:
            fields = json.loads(raw_message)
        except json.JSONDecodeError as e:
            raise MalformedRequest("body", f"invalid JSON ({e.msg})") from e

        if not isinstance(fields, dict):
            raise MalformedRequest("body", "expected a JSON object")
        return fields
