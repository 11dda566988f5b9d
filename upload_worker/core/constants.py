from enum import Enum


class ImageResourceType(Enum):
    PHOTO = "IMAGE_RESOURCE_PHOTO"
    AVATAR = "IMAGE_RESOURCE_AVATAR"


class MessageProperty(str, Enum):
    """Keys shared by request bodies and response headers."""

    IMAGE_RESOURCE_TEMP_PATH = "IMAGE_RESOURCE_TEMP_PATH"
    PROFILE_ID = "PROFILE_ID"
    IMAGE_RESOURCE_TYPE = "IMAGE_RESOURCE_TYPE"
    REQUEST_SUCCESS = "REQUEST_SUCCESS"


# AMQP delivery modes
TRANSIENT_DELIVERY_MODE = 1
PERSISTENT_DELIVERY_MODE = 2

JSON_CONTENT_TYPE = "application/json"
