"""Error taxonomy shared by providers, handlers and the HTTP boundary."""
from vision_cam_chat.constants import (
    MSG_ERR_EMPTY_SESSION,
    MSG_ERR_NO_OPENAI_KEY,
    MSG_ERR_UNKNOWN_PROVIDER,
)


class VisionCamError(Exception):
    """Base for every error the service reports to a caller."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "kind": self.kind}


class ValidationError(VisionCamError):
    kind = "validation_error"
    status_code = 400


class UnknownProviderError(ValidationError):
    kind = "unknown_provider"

    def __init__(self, name: object) -> None:
        super().__init__(MSG_ERR_UNKNOWN_PROVIDER % name)
        self.name = name


class UploadTooLargeError(ValidationError):
    kind = "upload_too_large"
    status_code = 413


class EmptySessionError(VisionCamError):
    kind = "empty_session"
    status_code = 409

    def __init__(self, message: str = MSG_ERR_EMPTY_SESSION) -> None:
        super().__init__(message)


class CredentialMissingError(VisionCamError):
    kind = "credential_missing"
    status_code = 401

    def __init__(self, message: str = MSG_ERR_NO_OPENAI_KEY) -> None:
        super().__init__(message)


class ProviderError(VisionCamError):
    """The remote model call failed or returned nothing usable."""

    kind = "provider_error"
    status_code = 502

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider
