"""VisionHandlers — analyze / ask / status logic, independent of the HTTP framework."""
import logging
from dataclasses import dataclass

from vision_cam_chat.config import Config
from vision_cam_chat.constants import (
    DEFAULT_IMAGE_MIME,
    DEFAULT_PROVIDER,
    MSG_ERR_INVALID_PROVIDER,
    MSG_ERR_INVALID_QUESTION,
    MSG_ERR_MISSING_IMAGE,
    MSG_PROVIDER_FAILED,
)
from vision_cam_chat.errors import ProviderError, ValidationError, VisionCamError
from vision_cam_chat.session import ImageSession
from vision_cam_chat.vision.client import ConfigStatus, VisionProvider
from vision_cam_chat.vision.factory import create_provider, is_valid_provider
from vision_cam_chat.vision.prompts import build_analysis_prompt, build_question_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyzeResult:
    provider: str
    caption: str


@dataclass(frozen=True)
class AskResult:
    provider: str
    answer: str


# ── pure helpers ──────────────────────────────────────────────────────────────


def _resolve_provider_name(raw: object) -> str:
    """Empty or missing provider falls back to the default; anything else must be known."""
    match raw:
        case None | "":
            return DEFAULT_PROVIDER
        case name if is_valid_provider(name):
            return name
        case _:
            raise ValidationError(MSG_ERR_INVALID_PROVIDER)


def _validate_question(raw: object) -> str:
    match raw:
        case str() as q if q.strip():
            return q
        case _:
            raise ValidationError(MSG_ERR_INVALID_QUESTION)


async def _invoke(provider: VisionProvider, call, *args) -> str:
    try:
        return await call(*args)
    except VisionCamError as e:
        logger.error(MSG_PROVIDER_FAILED, provider.get_name(), e.message)
        raise
    except Exception as e:
        logger.exception(MSG_PROVIDER_FAILED, provider.get_name(), e)
        raise ProviderError(provider.get_name(), str(e)) from e


# ── handlers ──────────────────────────────────────────────────────────────────


class VisionHandlers:
    """Routes analyze/ask requests to the chosen provider against the session image."""

    def __init__(self, session: ImageSession, config: Config | None = None) -> None:
        self._session = session
        self._config = config

    @property
    def session(self) -> ImageSession:
        return self._session

    def _provider(self, name: str, api_key: str | None) -> VisionProvider:
        return create_provider(name, api_key=api_key, config=self._config)

    async def analyze(
        self,
        image: bytes | None,
        mime_type: str | None,
        provider: object = None,
        api_key: str | None = None,
    ) -> AnalyzeResult:
        match image:
            case bytes() as data if data:
                pass
            case _:
                raise ValidationError(MSG_ERR_MISSING_IMAGE)
        name = _resolve_provider_name(provider)

        # Stored before the remote call so a failed analysis can still be asked about.
        stored = self._session.store(image, mime_type or DEFAULT_IMAGE_MIME)
        vision = self._provider(name, api_key)
        caption = await _invoke(
            vision, vision.analyze_image, stored.payload, stored.mime_type, build_analysis_prompt()
        )
        return AnalyzeResult(provider=name, caption=caption)

    async def ask(
        self,
        provider: object,
        question: object,
        api_key: str | None = None,
    ) -> AskResult:
        text = _validate_question(question)
        match provider:
            case name if is_valid_provider(name):
                pass
            case _:
                raise ValidationError(MSG_ERR_INVALID_PROVIDER)

        image = self._session.fetch()
        vision = self._provider(name, api_key)
        answer = await _invoke(
            vision, vision.ask_question, image.payload, image.mime_type, build_question_prompt(text)
        )
        return AskResult(provider=name, answer=answer)

    def clear(self) -> None:
        self._session.clear()

    @staticmethod
    def health() -> dict[str, bool]:
        return {"ok": True}

    async def provider_status(self, name: str, api_key: str | None = None) -> ConfigStatus:
        return await self._provider(name, api_key).validate_config()
