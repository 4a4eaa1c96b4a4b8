"""VisionProvider — abstract base for remote vision-model backends."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from vision_cam_chat.constants import PROVIDER_BEDROCK, PROVIDER_OPENAI


class ProviderName(str, Enum):
    OPENAI = PROVIDER_OPENAI
    BEDROCK = PROVIDER_BEDROCK


class CredentialSource(str, Enum):
    REQUEST_HEADER = "request_header"
    ENVIRONMENT = "environment"


@dataclass(frozen=True)
class ConfigStatus:
    ok: bool
    message: str


class VisionProvider(ABC):
    name: ProviderName
    credential_source: CredentialSource

    def get_name(self) -> str:
        return self.name.value

    @abstractmethod
    async def analyze_image(self, image_data: str, mime_type: str, prompt: str) -> str:
        """Send a base64 image plus prompt, return the model's first text reply.

        Raises CredentialMissingError before any network call when the provider
        has no credential, ProviderError when the remote call fails or returns
        no text.
        """
        ...

    async def ask_question(self, image_data: str, mime_type: str, question: str) -> str:
        """Both backends treat a question as a one-shot prompt over the same image."""
        return await self.analyze_image(image_data, mime_type, question)

    @abstractmethod
    async def validate_config(self) -> ConfigStatus:
        """Local configuration check. Never invokes the billed model endpoint."""
        ...
