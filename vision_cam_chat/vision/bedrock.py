"""BedrockVisionProvider — Claude on AWS Bedrock via the InvokeModel API."""
import asyncio
import json
import logging
import os

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from vision_cam_chat.constants import (
    BEDROCK_ANTHROPIC_VERSION,
    BEDROCK_CONTENT_TYPE,
    BEDROCK_SERVICE_NAME,
    DEFAULT_AWS_REGION,
    DEFAULT_BEDROCK_MODEL_ID,
    MSG_BEDROCK_INIT_FAILED,
    MSG_BEDROCK_READY,
    MSG_ERR_NO_BEDROCK_BODY,
    MSG_ERR_NO_BEDROCK_TEXT,
    VISION_MAX_TOKENS,
)
from vision_cam_chat.errors import ProviderError
from vision_cam_chat.vision.client import (
    ConfigStatus,
    CredentialSource,
    ProviderName,
    VisionProvider,
)

logger = logging.getLogger(__name__)


def build_request_body(image_data: str, mime_type: str, prompt: str) -> dict:
    """Anthropic messages envelope expected by Claude models on Bedrock."""
    return {
        "anthropic_version": BEDROCK_ANTHROPIC_VERSION,
        "max_tokens": VISION_MAX_TOKENS,
        "messages": [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": mime_type,
                            "data": image_data,
                        },
                    },
                    {"type": "text", "text": prompt},
                ],
            }
        ],
    }


def extract_text(raw_body: bytes) -> str | None:
    """Return content[0].text from a raw Bedrock response body, or None."""
    decoded = json.loads(raw_body.decode("utf-8"))
    match decoded:
        case {"content": [{"text": str() as text}, *_]} if text.strip():
            return text.strip()
        case _:
            return None


class BedrockVisionProvider(VisionProvider):
    name = ProviderName.BEDROCK
    credential_source = CredentialSource.ENVIRONMENT

    def __init__(self, region: str | None = None, model_id: str | None = None) -> None:
        self._region = region or os.getenv("AWS_REGION") or DEFAULT_AWS_REGION
        self._model_id = model_id or os.getenv("BEDROCK_MODEL_ID") or DEFAULT_BEDROCK_MODEL_ID

    @property
    def region(self) -> str:
        return self._region

    @property
    def model_id(self) -> str:
        return self._model_id

    def _client(self):
        return boto3.client(BEDROCK_SERVICE_NAME, region_name=self._region)

    def _invoke(self, body: dict) -> bytes | None:
        response = self._client().invoke_model(
            modelId=self._model_id,
            contentType=BEDROCK_CONTENT_TYPE,
            accept=BEDROCK_CONTENT_TYPE,
            body=json.dumps(body),
        )
        stream = response.get("body")
        return stream.read() if stream is not None else None

    async def analyze_image(self, image_data: str, mime_type: str, prompt: str) -> str:
        body = build_request_body(image_data, mime_type, prompt)
        try:
            raw = await asyncio.to_thread(self._invoke, body)
        except (BotoCoreError, ClientError) as e:
            raise ProviderError(self.get_name(), str(e)) from e

        match raw:
            case None | b"":
                raise ProviderError(self.get_name(), MSG_ERR_NO_BEDROCK_BODY)
            case _:
                pass

        try:
            text = extract_text(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ProviderError(self.get_name(), f"Malformed Bedrock response: {e}") from e

        match text:
            case None:
                raise ProviderError(self.get_name(), MSG_ERR_NO_BEDROCK_TEXT)
            case _:
                return text

    async def validate_config(self) -> ConfigStatus:
        try:
            self._client()
        except BotoCoreError as e:
            logger.warning(MSG_BEDROCK_INIT_FAILED, e)
            return ConfigStatus(ok=False, message=MSG_BEDROCK_INIT_FAILED % e)
        return ConfigStatus(ok=True, message=MSG_BEDROCK_READY % (self._region, self._model_id))
