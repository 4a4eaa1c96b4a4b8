"""HTTP boundary tests — FastAPI TestClient against a fresh app per test."""
import io
import json
from dataclasses import replace

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi.testclient import TestClient

from vision_cam_chat.api import create_app
from vision_cam_chat.config import Config
from vision_cam_chat.session import ImageSession

JPEG = b"\xff\xd8\xff\xe0fake-jpeg"

BASE_CONFIG = Config(
    host="127.0.0.1",
    port=3000,
    log_level="INFO",
    app_env="development",
    aws_region="us-east-1",
    bedrock_model_id="anthropic.claude-3-haiku-20240307-v1:0",
    openai_vision_model="gpt-4o-mini",
    max_upload_mb=1,
    cors_origins=("*",),
)


@pytest.fixture
def session():
    return ImageSession()


@pytest.fixture
def client(session):
    return TestClient(create_app(BASE_CONFIG, session=session))


def bedrock_reply(text: str) -> dict:
    return {"body": io.BytesIO(json.dumps({"content": [{"type": "text", "text": text}]}).encode())}


def upload(content: bytes = JPEG, mime: str = "image/jpeg") -> dict:
    return {"frame": ("photo.jpg", content, mime)}


# ── health / status ───────────────────────────────────────────────────────────


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_providers(client):
    body = client.get("/providers").json()
    assert body["providers"] == ["openai", "bedrock"]
    assert body["api_key_required"] == {"openai": True, "bedrock": False}
    assert body["default"] == "bedrock"


def test_bedrock_status_uses_config_and_never_invokes(client):
    with patch("vision_cam_chat.vision.bedrock.boto3") as mock_boto3:
        first = client.get("/bedrock/status").json()
        second = client.get("/bedrock/status").json()

    assert first["ok"] is True and second["ok"] is True
    assert "us-east-1" in first["message"]
    mock_boto3.client.return_value.invoke_model.assert_not_called()


def test_openai_status_reads_header(client):
    assert client.get("/openai/status").json()["ok"] is False
    assert client.get("/openai/status", headers={"X-Api-Key": "sk-test"}).json()["ok"] is True


# ── /analyze ──────────────────────────────────────────────────────────────────


def test_analyze_bedrock(client, session):
    with patch("vision_cam_chat.vision.bedrock.boto3") as mock_boto3:
        mock_boto3.client.return_value.invoke_model.return_value = bedrock_reply("A red mug on a table.")
        response = client.post("/analyze", files=upload(), data={"provider": "bedrock"})

    assert response.status_code == 200
    assert response.json() == {"provider": "bedrock", "caption": "A red mug on a table."}
    assert session.fetch().mime_type == "image/jpeg"


def test_analyze_missing_image(client, session):
    response = client.post("/analyze", data={"provider": "bedrock"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Missing image")
    assert session.is_empty


def test_analyze_invalid_provider(client, session):
    response = client.post("/analyze", files=upload(), data={"provider": "bogus"})

    assert response.status_code == 400
    assert response.json() == {
        "error": 'Invalid provider. Must be "openai" or "bedrock".',
        "kind": "validation_error",
    }
    assert session.is_empty


def test_analyze_rejects_non_image(client, session):
    response = client.post("/analyze", files=upload(b"hello", "text/plain"))

    assert response.status_code == 400
    assert response.json()["error"] == "Only image files are allowed"
    assert session.is_empty


def test_analyze_rejects_oversized_upload(client, session):
    response = client.post("/analyze", files=upload(b"\x00" * (1024 * 1024 + 1)))

    assert response.status_code == 413
    assert response.json()["kind"] == "upload_too_large"
    assert session.is_empty


def test_analyze_openai_without_key(client):
    with patch("vision_cam_chat.vision.openai.AsyncOpenAI") as mock_cls:
        response = client.post("/analyze", files=upload(), data={"provider": "openai"})

    assert response.status_code == 401
    assert response.json()["kind"] == "credential_missing"
    mock_cls.assert_not_called()


def test_analyze_openai_empty_content_is_502(client):
    mock_choice = MagicMock()
    mock_choice.message.content = None
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]

    with patch("vision_cam_chat.vision.openai.AsyncOpenAI") as mock_cls:
        mock_openai = AsyncMock()
        mock_openai.chat.completions.create = AsyncMock(return_value=mock_response)
        mock_cls.return_value = mock_openai
        response = client.post(
            "/analyze",
            files=upload(),
            data={"provider": "openai"},
            headers={"X-Api-Key": "sk-test"},
        )

    assert response.status_code == 502
    assert response.json() == {"error": "No response from OpenAI", "kind": "provider_error"}
    mock_cls.assert_called_once_with(api_key="sk-test")


def test_production_hides_remote_error_text(session):
    client = TestClient(create_app(replace(BASE_CONFIG, app_env="production"), session=session))

    with patch("vision_cam_chat.vision.bedrock.boto3") as mock_boto3:
        mock_boto3.client.return_value.invoke_model.return_value = {}
        analyzed = client.post("/analyze", files=upload())
        asked = client.post("/ask", json={"provider": "bedrock", "question": "What is this?"})

    assert analyzed.status_code == 502
    assert analyzed.json()["error"] == "Failed to analyze image"
    assert asked.json()["error"] == "Failed to process question"


# ── /ask ──────────────────────────────────────────────────────────────────────


def test_ask_before_analyze_is_409(client):
    response = client.post("/ask", json={"provider": "bedrock", "question": "What is this?"})

    assert response.status_code == 409
    assert response.json() == {"error": "No image has been uploaded yet", "kind": "empty_session"}


def test_ask_invalid_question(client):
    response = client.post("/ask", json={"provider": "bedrock", "question": 7})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Missing or invalid question")


def test_ask_invalid_provider(client):
    response = client.post("/ask", json={"question": "What is this?"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid provider")


def test_ask_malformed_body(client):
    response = client.post(
        "/ask", content=b"not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"


def test_analyze_then_ask(client):
    with patch("vision_cam_chat.vision.bedrock.boto3") as mock_boto3:
        mock_boto3.client.return_value.invoke_model.side_effect = [
            bedrock_reply("A red mug on a table."),
            bedrock_reply("Red."),
        ]
        client.post("/analyze", files=upload(), data={"provider": "bedrock"})
        response = client.post("/ask", json={"provider": "bedrock", "question": "What color is the mug?"})

    assert response.status_code == 200
    assert response.json() == {"provider": "bedrock", "answer": "Red."}


def test_clear_session(client, session):
    session.store(JPEG, "image/jpeg")

    response = client.delete("/session")

    assert response.json() == {"ok": True}
    assert session.is_empty
