"""OpenAIVisionProvider — OpenAI chat-completions vision backend."""
import logging

from openai import AsyncOpenAI, OpenAIError

from vision_cam_chat.constants import (
    DEFAULT_OPENAI_VISION_MODEL,
    MSG_ERR_NO_OPENAI_KEY,
    MSG_ERR_NO_OPENAI_RESPONSE,
    MSG_OPENAI_INIT_FAILED,
    MSG_OPENAI_READY,
    OPENAI_IMAGE_DETAIL,
    VISION_MAX_TOKENS,
)
from vision_cam_chat.errors import CredentialMissingError, ProviderError
from vision_cam_chat.vision.client import (
    ConfigStatus,
    CredentialSource,
    ProviderName,
    VisionProvider,
)

logger = logging.getLogger(__name__)


class OpenAIVisionProvider(VisionProvider):
    name = ProviderName.OPENAI
    credential_source = CredentialSource.REQUEST_HEADER

    def __init__(self, api_key: str | None = None, model: str = DEFAULT_OPENAI_VISION_MODEL) -> None:
        self._api_key = api_key
        self._model = model

    async def analyze_image(self, image_data: str, mime_type: str, prompt: str) -> str:
        match self._api_key:
            case str() as k if k:
                client = AsyncOpenAI(api_key=k)
            case _:
                raise CredentialMissingError()

        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {
                                "type": "image_url",
                                "image_url": {
                                    "url": f"data:{mime_type};base64,{image_data}",
                                    "detail": OPENAI_IMAGE_DETAIL,
                                },
                            },
                        ],
                    }
                ],
                max_tokens=VISION_MAX_TOKENS,
            )
        except OpenAIError as e:
            raise ProviderError(self.get_name(), str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        match content:
            case str() as text if text.strip():
                return text.strip()
            case _:
                raise ProviderError(self.get_name(), MSG_ERR_NO_OPENAI_RESPONSE)

    async def validate_config(self) -> ConfigStatus:
        match self._api_key:
            case str() as k if k:
                pass
            case _:
                return ConfigStatus(ok=False, message=MSG_ERR_NO_OPENAI_KEY)
        try:
            AsyncOpenAI(api_key=self._api_key)
        except OpenAIError as e:
            logger.warning(MSG_OPENAI_INIT_FAILED, e)
            return ConfigStatus(ok=False, message=MSG_OPENAI_INIT_FAILED % e)
        return ConfigStatus(ok=True, message=MSG_OPENAI_READY)
