import pytest

from vision_cam_chat.config import Config
from vision_cam_chat.errors import UnknownProviderError, ValidationError
from vision_cam_chat.vision.bedrock import BedrockVisionProvider
from vision_cam_chat.vision.factory import (
    create_provider,
    is_valid_provider,
    list_supported_providers,
    requires_api_key,
)
from vision_cam_chat.vision.openai import OpenAIVisionProvider


@pytest.mark.parametrize("name", ["openai", "bedrock"])
def test_create_provider_name_round_trips(name):
    assert create_provider(name).get_name() == name


def test_create_provider_unknown_name_fails():
    with pytest.raises(UnknownProviderError, match="gemini"):
        create_provider("gemini")


def test_unknown_provider_is_a_validation_error():
    assert issubclass(UnknownProviderError, ValidationError)


def test_create_openai_defers_missing_key():
    provider = create_provider("openai")
    assert isinstance(provider, OpenAIVisionProvider)


def test_create_bedrock_ignores_api_key():
    provider = create_provider("bedrock", api_key="sk-should-be-ignored")
    assert isinstance(provider, BedrockVisionProvider)


def test_create_provider_uses_config(monkeypatch):
    monkeypatch.setattr("vision_cam_chat.config.load_dotenv", lambda **_: None)
    monkeypatch.setenv("AWS_REGION", "us-west-2")
    monkeypatch.setenv("BEDROCK_MODEL_ID", "model-from-config")
    config = Config.from_env()
    monkeypatch.delenv("AWS_REGION")
    monkeypatch.delenv("BEDROCK_MODEL_ID")

    provider = create_provider("bedrock", config=config)

    assert provider.region == "us-west-2"
    assert provider.model_id == "model-from-config"


def test_list_supported_providers():
    assert list_supported_providers() == ["openai", "bedrock"]


@pytest.mark.parametrize(
    "name, expected",
    [("openai", True), ("bedrock", True), ("OpenAI", False), ("", False), (None, False), (42, False)],
)
def test_is_valid_provider(name, expected):
    assert is_valid_provider(name) is expected


def test_requires_api_key():
    assert requires_api_key("openai") is True
    assert requires_api_key("bedrock") is False
    with pytest.raises(UnknownProviderError):
        requires_api_key("gemini")
