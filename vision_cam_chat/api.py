"""FastAPI application — the HTTP boundary around VisionHandlers."""

import logging

from fastapi import APIRouter, Depends, FastAPI, File, Form, Header, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vision_cam_chat.config import Config
from vision_cam_chat.constants import (
    APP_TITLE,
    APP_VERSION,
    DEFAULT_PROVIDER,
    IMAGE_MIME_PREFIX,
    MSG_CALLER_ERROR,
    MSG_ERR_ANALYZE_FAILED,
    MSG_ERR_ASK_FAILED,
    MSG_ERR_INTERNAL,
    MSG_ERR_INVALID_BODY,
    MSG_ERR_NOT_AN_IMAGE,
    MSG_ERR_UPLOAD_TOO_LARGE,
    MSG_UNHANDLED,
    PROVIDER_BEDROCK,
    PROVIDER_OPENAI,
)
from vision_cam_chat.errors import ProviderError, UploadTooLargeError, ValidationError, VisionCamError
from vision_cam_chat.handlers import VisionHandlers
from vision_cam_chat.schemas import (
    AnalyzeResponse,
    AskRequest,
    AskResponse,
    ErrorResponse,
    HealthResponse,
    ProvidersResponse,
    StatusResponse,
)
from vision_cam_chat.session import ImageSession
from vision_cam_chat.vision.factory import list_supported_providers, requires_api_key

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_handlers(request: Request) -> VisionHandlers:
    return request.app.state.handlers


def get_config(request: Request) -> Config:
    return request.app.state.config


async def read_upload(frame: UploadFile | None, max_bytes: int) -> tuple[bytes | None, str | None]:
    """Read an uploaded frame, enforcing the image-only and size rules."""
    if frame is None:
        return None, None
    if not (frame.content_type or "").startswith(IMAGE_MIME_PREFIX):
        raise ValidationError(MSG_ERR_NOT_AN_IMAGE)

    data = await frame.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise UploadTooLargeError(MSG_ERR_UPLOAD_TOO_LARGE % (max_bytes // (1024 * 1024)))
    return data, frame.content_type


@router.get("/health", response_model=HealthResponse)
async def health(handlers: VisionHandlers = Depends(get_handlers)):
    """Liveness check."""
    return handlers.health()


@router.get("/providers", response_model=ProvidersResponse)
async def providers():
    """List supported providers and the default used by /analyze."""
    names = list_supported_providers()
    return ProvidersResponse(
        providers=names,
        api_key_required={name: requires_api_key(name) for name in names},
        default=DEFAULT_PROVIDER,
    )


@router.get("/bedrock/status", response_model=StatusResponse)
async def bedrock_status(handlers: VisionHandlers = Depends(get_handlers)):
    """Check Bedrock region/model configuration without invoking the model."""
    status = await handlers.provider_status(PROVIDER_BEDROCK)
    return StatusResponse(ok=status.ok, message=status.message)


@router.get("/openai/status", response_model=StatusResponse)
async def openai_status(
    handlers: VisionHandlers = Depends(get_handlers),
    x_api_key: str | None = Header(None),
):
    """Check that an OpenAI key was supplied. The key itself is not verified."""
    status = await handlers.provider_status(PROVIDER_OPENAI, x_api_key)
    return StatusResponse(ok=status.ok, message=status.message)


@router.post("/analyze", response_model=AnalyzeResponse, responses=ERROR_RESPONSES)
async def analyze(
    frame: UploadFile | None = File(None, description="Captured image"),
    provider: str | None = Form(None, description="openai or bedrock (default bedrock)"),
    x_api_key: str | None = Header(None),
    handlers: VisionHandlers = Depends(get_handlers),
    config: Config = Depends(get_config),
):
    """Store the uploaded frame as the session image and caption it."""
    image, mime_type = await read_upload(frame, config.max_upload_bytes)
    result = await handlers.analyze(image, mime_type, provider, x_api_key)
    return AnalyzeResponse(provider=result.provider, caption=result.caption)


@router.post("/ask", response_model=AskResponse, responses=ERROR_RESPONSES)
async def ask(
    body: AskRequest,
    x_api_key: str | None = Header(None),
    handlers: VisionHandlers = Depends(get_handlers),
):
    """Answer a question about the current session image."""
    result = await handlers.ask(body.provider, body.question, x_api_key)
    return AskResponse(provider=result.provider, answer=result.answer)


@router.delete("/session", response_model=HealthResponse)
async def clear_session(handlers: VisionHandlers = Depends(get_handlers)):
    """Forget the session image."""
    handlers.clear()
    return {"ok": True}


def _public_message(exc: VisionCamError, path: str, production: bool) -> str:
    match (exc, production):
        case (ProviderError(), True):
            return MSG_ERR_ANALYZE_FAILED if path.endswith("/analyze") else MSG_ERR_ASK_FAILED
        case _:
            return exc.message


def create_app(config: Config, session: ImageSession | None = None) -> FastAPI:
    """Build the app around an explicitly owned session store."""
    app = FastAPI(
        title=APP_TITLE,
        description="Webcam frame captioning and follow-up Q&A over OpenAI or AWS Bedrock",
        version=APP_VERSION,
    )
    app.state.config = config
    app.state.session = session or ImageSession()
    app.state.handlers = VisionHandlers(app.state.session, config)

    # "*" also covers file:// pages, which report their origin as "null"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(VisionCamError)
    async def vision_error_handler(request: Request, exc: VisionCamError):
        if exc.status_code < 500:
            logger.warning(MSG_CALLER_ERROR, request.method, request.url.path, exc.message)
        payload = ErrorResponse(
            error=_public_message(exc, request.url.path, config.is_production),
            kind=exc.kind,
        )
        return JSONResponse(status_code=exc.status_code, content=payload.model_dump())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(MSG_CALLER_ERROR, request.method, request.url.path, exc.errors())
        payload = ErrorResponse(error=MSG_ERR_INVALID_BODY, kind=ValidationError.kind)
        return JSONResponse(status_code=ValidationError.status_code, content=payload.model_dump())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(MSG_UNHANDLED, request.method, request.url.path)
        message = MSG_ERR_INTERNAL if config.is_production else str(exc) or MSG_ERR_INTERNAL
        return JSONResponse(status_code=500, content=ErrorResponse(error=message).model_dump())

    app.include_router(router)
    return app
