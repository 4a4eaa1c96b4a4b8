"""Provider factory — maps a request-supplied provider name onto a VisionProvider."""
import logging

from vision_cam_chat.config import Config
from vision_cam_chat.constants import MSG_PROVIDER_SELECTED
from vision_cam_chat.errors import UnknownProviderError
from vision_cam_chat.vision.bedrock import BedrockVisionProvider
from vision_cam_chat.vision.client import CredentialSource, ProviderName, VisionProvider
from vision_cam_chat.vision.openai import OpenAIVisionProvider

logger = logging.getLogger(__name__)

_CREDENTIAL_SOURCES: dict[ProviderName, CredentialSource] = {
    ProviderName.OPENAI: OpenAIVisionProvider.credential_source,
    ProviderName.BEDROCK: BedrockVisionProvider.credential_source,
}


def list_supported_providers() -> list[str]:
    return [p.value for p in ProviderName]


def is_valid_provider(name: object) -> bool:
    return isinstance(name, str) and name in list_supported_providers()


def requires_api_key(name: str) -> bool:
    """True when the provider reads its credential from the X-Api-Key header."""
    match is_valid_provider(name):
        case True:
            return _CREDENTIAL_SOURCES[ProviderName(name)] is CredentialSource.REQUEST_HEADER
        case False:
            raise UnknownProviderError(name)


def create_provider(
    name: object,
    api_key: str | None = None,
    config: Config | None = None,
) -> VisionProvider:
    """Build a fresh provider for one request.

    The OpenAI variant takes the caller's key as-is (a missing key fails at
    call time). The Bedrock variant reads region and model from config or the
    environment and ignores api_key.
    """
    match is_valid_provider(name) and ProviderName(name):
        case ProviderName.OPENAI:
            provider: VisionProvider = (
                OpenAIVisionProvider(api_key, model=config.openai_vision_model)
                if config
                else OpenAIVisionProvider(api_key)
            )
        case ProviderName.BEDROCK:
            provider = (
                BedrockVisionProvider(config.aws_region, config.bedrock_model_id)
                if config
                else BedrockVisionProvider()
            )
        case _:
            raise UnknownProviderError(name)
    logger.info(MSG_PROVIDER_SELECTED, provider.get_name())
    return provider
