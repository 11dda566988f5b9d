"""Unit tests for RequestDecoder - inbound message validation."""

import json

import pytest
from pydantic import ValidationError

from upload_worker.core.constants import ImageResourceType
from upload_worker.domain.exceptions import MalformedRequest
from upload_worker.services.request_decoder import RequestDecoder


VALID_FIELDS = {
    "IMAGE_RESOURCE_TEMP_PATH": "/tmp/x.jpg",
    "PROFILE_ID": 42,
    "IMAGE_RESOURCE_TYPE": "IMAGE_RESOURCE_PHOTO",
}


class TestRequestDecoder:
    """Test suite for RequestDecoder."""

    @pytest.fixture
    def decoder(self):
        return RequestDecoder()

    def test_decode_json_bytes(self, decoder):
        request = decoder.decode(json.dumps(VALID_FIELDS).encode())

        assert request.resource_type is ImageResourceType.PHOTO
        assert request.temp_path == "/tmp/x.jpg"
        assert request.profile_id == 42

    def test_decode_mapping(self, decoder):
        fields = dict(VALID_FIELDS, IMAGE_RESOURCE_TYPE="IMAGE_RESOURCE_AVATAR")

        request = decoder.decode(fields)

        assert request.resource_type is ImageResourceType.AVATAR

    def test_decode_accepts_integral_string_profile_id(self, decoder):
        request = decoder.decode(dict(VALID_FIELDS, PROFILE_ID="42"))

        assert request.profile_id == 42

    def test_decode_ignores_extra_fields(self, decoder):
        request = decoder.decode(dict(VALID_FIELDS, EXTRA="ignored"))

        assert request.profile_id == 42

    def test_decoded_request_is_immutable(self, decoder):
        request = decoder.decode(VALID_FIELDS)

        with pytest.raises(ValidationError):
            request.profile_id = 7

    @pytest.mark.parametrize(
        "missing",
        ["IMAGE_RESOURCE_TEMP_PATH", "PROFILE_ID", "IMAGE_RESOURCE_TYPE"],
    )
    def test_missing_field(self, decoder, missing):
        fields = {k: v for k, v in VALID_FIELDS.items() if k != missing}

        with pytest.raises(MalformedRequest) as exc_info:
            decoder.decode(fields)

        assert exc_info.value.field == missing
        assert exc_info.value.error_code == "MALFORMED_REQUEST"

    def test_unknown_resource_type(self, decoder):
        with pytest.raises(MalformedRequest) as exc_info:
            decoder.decode(dict(VALID_FIELDS, IMAGE_RESOURCE_TYPE="IMAGE_RESOURCE_VIDEO"))

        assert exc_info.value.field == "IMAGE_RESOURCE_TYPE"

    @pytest.mark.parametrize("profile_id", [True, 4.5, "abc", None, 2**63])
    def test_invalid_profile_id(self, decoder, profile_id):
        with pytest.raises(MalformedRequest) as exc_info:
            decoder.decode(dict(VALID_FIELDS, PROFILE_ID=profile_id))

        assert exc_info.value.field == "PROFILE_ID"

    @pytest.mark.parametrize("temp_path", ["", "   ", 123])
    def test_invalid_temp_path(self, decoder, temp_path):
        with pytest.raises(MalformedRequest) as exc_info:
            decoder.decode(dict(VALID_FIELDS, IMAGE_RESOURCE_TEMP_PATH=temp_path))

        assert exc_info.value.field == "IMAGE_RESOURCE_TEMP_PATH"

    @pytest.mark.parametrize(
        "body", [b"not json", b"[1, 2, 3]", b"\xff\xfe", "\"just a string\""]
    )
    def test_body_is_not_a_json_object(self, decoder, body):
        with pytest.raises(MalformedRequest) as exc_info:
            decoder.decode(body)

        assert exc_info.value.field == "body"

    def test_unsupported_message_type(self, decoder):
        with pytest.raises(MalformedRequest):
            decoder.decode(12345)
