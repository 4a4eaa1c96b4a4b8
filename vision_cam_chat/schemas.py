"""Schemas for the HTTP request/response bodies."""

from typing import Any

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    """Follow-up question about the session image.

    Fields are left untyped so the handler, not pydantic, decides what counts
    as a missing or invalid value.
    """

    provider: Any = Field(default=None, description="openai or bedrock")
    question: Any = Field(default=None, description="Question about the last analyzed image")


class AnalyzeResponse(BaseModel):
    provider: str
    caption: str


class AskResponse(BaseModel):
    provider: str
    answer: str


class HealthResponse(BaseModel):
    ok: bool


class StatusResponse(BaseModel):
    ok: bool
    message: str


class ProvidersResponse(BaseModel):
    providers: list[str]
    api_key_required: dict[str, bool]
    default: str


class ErrorResponse(BaseModel):
    error: str
    kind: str = "error"
