"""All magic values live here — no inline literals anywhere else."""

# Providers
PROVIDER_OPENAI = "openai"
PROVIDER_BEDROCK = "bedrock"
DEFAULT_PROVIDER = PROVIDER_BEDROCK

# Vision call shape (shared by both providers)
VISION_MAX_TOKENS = 300

# OpenAI
DEFAULT_OPENAI_VISION_MODEL = "gpt-4o-mini"
OPENAI_IMAGE_DETAIL = "low"
API_KEY_HEADER = "X-Api-Key"

# Bedrock
BEDROCK_SERVICE_NAME = "bedrock-runtime"
BEDROCK_ANTHROPIC_VERSION = "bedrock-2023-05-31"
BEDROCK_CONTENT_TYPE = "application/json"
DEFAULT_AWS_REGION = "ap-southeast-2"
DEFAULT_BEDROCK_MODEL_ID = "anthropic.claude-3-haiku-20240307-v1:0"

# Server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = "3000"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_APP_ENV = "development"
APP_ENVS = ("development", "production")
DEFAULT_MAX_UPLOAD_MB = "10"
DEFAULT_CORS_ORIGINS = "*"
UPLOAD_FIELD = "frame"
IMAGE_MIME_PREFIX = "image/"
DEFAULT_IMAGE_MIME = "image/jpeg"
APP_TITLE = "Vision Cam Chat"
APP_VERSION = "0.1.0"

# Prompts
VISIBILITY_CONSTRAINT = (
    "Answer ONLY from what you can see in the image. If unsure, say you're unsure "
    "and suggest how to improve the photo (move closer, reduce glare)."
)
ANALYZE_PROMPT = (
    "Describe what you see in this image in 1-2 sentences. Answer ONLY from what "
    "you can see. If unsure, say you're unsure and suggest how to improve the photo "
    "(move closer, reduce glare)."
)

# Caller-facing error messages
MSG_ERR_MISSING_IMAGE = f'Missing image. Please provide an image in the "{UPLOAD_FIELD}" field.'
MSG_ERR_INVALID_PROVIDER = 'Invalid provider. Must be "openai" or "bedrock".'
MSG_ERR_INVALID_QUESTION = "Missing or invalid question. Please provide a question string."
MSG_ERR_NOT_AN_IMAGE = "Only image files are allowed"
MSG_ERR_UPLOAD_TOO_LARGE = "Image exceeds the %d MB upload limit"
MSG_ERR_EMPTY_SESSION = "No image has been uploaded yet"
MSG_ERR_NO_OPENAI_KEY = f"OpenAI API key required. Provide it via {API_KEY_HEADER} header."
MSG_ERR_UNKNOWN_PROVIDER = "Unknown provider: %s"
MSG_ERR_NO_OPENAI_RESPONSE = "No response from OpenAI"
MSG_ERR_NO_BEDROCK_BODY = "No response body from Bedrock"
MSG_ERR_NO_BEDROCK_TEXT = "No text content in Bedrock response"
MSG_ERR_ANALYZE_FAILED = "Failed to analyze image"
MSG_ERR_ASK_FAILED = "Failed to process question"
MSG_ERR_INTERNAL = "Internal server error"
MSG_ERR_INVALID_BODY = "Invalid request body"

# Provider status messages
MSG_OPENAI_READY = "OpenAI provider initialized successfully"
MSG_OPENAI_INIT_FAILED = "OpenAI initialization failed: %s"
MSG_BEDROCK_READY = "Bedrock initialized successfully in region %s with model %s"
MSG_BEDROCK_INIT_FAILED = "Bedrock initialization failed: %s"

# Log messages
MSG_SERVER_STARTING = "Vision Cam Chat server running on %s:%d"
MSG_ENDPOINT = "  %-6s %s"
MSG_PROVIDER_SELECTED = "→ %s"
MSG_SESSION_STORED = "Stored %s image (%d bytes)"
MSG_SESSION_CLEARED = "Session image cleared"
MSG_PROVIDER_FAILED = "✗ %s failed: %s"
MSG_CALLER_ERROR = "Rejected %s %s: %s"
MSG_UNHANDLED = "Unhandled error on %s %s"
