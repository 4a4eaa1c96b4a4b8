from dataclasses import dataclass
import os
from dotenv import load_dotenv

from vision_cam_chat.constants import (
    APP_ENVS,
    DEFAULT_APP_ENV,
    DEFAULT_AWS_REGION,
    DEFAULT_BEDROCK_MODEL_ID,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_UPLOAD_MB,
    DEFAULT_OPENAI_VISION_MODEL,
    DEFAULT_PORT,
)


@dataclass(frozen=True)
class Config:
    host: str
    port: int
    log_level: str
    app_env: str
    aws_region: str
    bedrock_model_id: str
    openai_vision_model: str
    max_upload_mb: int
    cors_origins: tuple[str, ...]
    bedrock_configured: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        host = os.getenv("HOST", DEFAULT_HOST)
        port = os.getenv("PORT", DEFAULT_PORT)
        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
        app_env = os.getenv("APP_ENV", DEFAULT_APP_ENV)
        raw_region = os.getenv("AWS_REGION") or None
        raw_model_id = os.getenv("BEDROCK_MODEL_ID") or None
        openai_model = os.getenv("OPENAI_VISION_MODEL") or DEFAULT_OPENAI_VISION_MODEL
        max_upload_mb = os.getenv("MAX_UPLOAD_MB", DEFAULT_MAX_UPLOAD_MB)
        raw_origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

        origins = tuple(o.strip() for o in raw_origins.split(",") if o.strip())

        return cls._validate(
            host=host,
            port=port,
            log_level=log_level,
            app_env=app_env.lower(),
            aws_region=raw_region or DEFAULT_AWS_REGION,
            bedrock_model_id=raw_model_id or DEFAULT_BEDROCK_MODEL_ID,
            openai_vision_model=openai_model,
            max_upload_mb=max_upload_mb,
            cors_origins=origins or (DEFAULT_CORS_ORIGINS,),
            bedrock_configured=bool(raw_region and raw_model_id),
        )

    @staticmethod
    def _validate(
        host: str,
        port: str,
        log_level: str,
        app_env: str,
        aws_region: str,
        bedrock_model_id: str,
        openai_vision_model: str,
        max_upload_mb: str,
        cors_origins: tuple[str, ...],
        bedrock_configured: bool,
    ) -> "Config":
        match port.strip().isdigit() and 1 <= int(port) <= 65535:
            case True:
                pass
            case False:
                raise ValueError(f"Invalid PORT: {port}. Must be between 1 and 65535.")

        match app_env:
            case env if env in APP_ENVS:
                pass
            case _:
                raise ValueError(f"Invalid APP_ENV: {app_env}. Must be one of {', '.join(APP_ENVS)}.")

        match max_upload_mb.strip().isdigit() and int(max_upload_mb) > 0:
            case True:
                pass
            case False:
                raise ValueError(f"Invalid MAX_UPLOAD_MB: {max_upload_mb}. Must be a positive integer.")

        return Config(
            host=host,
            port=int(port),
            log_level=log_level,
            app_env=app_env,
            aws_region=aws_region,
            bedrock_model_id=bedrock_model_id,
            openai_vision_model=openai_vision_model,
            max_upload_mb=int(max_upload_mb),
            cors_origins=cors_origins,
            bedrock_configured=bedrock_configured,
        )

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    def summary(self) -> str:
        return "\n".join([
            f"Environment: {self.app_env}",
            f"Port: {self.port}",
            f"Bedrock Configured: {self.bedrock_configured}",
            f"AWS Region: {self.aws_region}",
            f"Bedrock Model: {self.bedrock_model_id}",
            f"OpenAI Model: {self.openai_vision_model}",
        ])
