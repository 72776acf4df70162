import functools

from aws_lambda_powertools.event_handler import APIGatewayHttpResolver, CORSConfig
from aws_lambda_powertools.utilities.typing import LambdaContext

from pdfcomposer.clients.s3 import S3Client
from pdfcomposer.config.app import AppConfig
from pdfcomposer.handlers import handle_render_document
from pdfcomposer.middleware.error_handler import error_handler_middleware
from pdfcomposer.middleware.logging import logger, logging_middleware
from pdfcomposer.models.api import VersionResponse

# --- Constants and Setup ---
cors_config = CORSConfig(
    allow_origin="*",
    allow_headers=["Content-Type"],
)

app = APIGatewayHttpResolver(cors=cors_config)

# --- Load Configuration and Initialize Services ---
try:
    app_config = AppConfig.from_env()
    logger.info(
        "Configuration loaded successfully.",
        extra={
            "app_env": app_config.app_env,
            "version": app_config.version,
            "commit_hash": app_config.commit_hash,
        },
    )
except Exception as e:
    logger.exception("CRITICAL: Failed to load configuration or initialize services.")
    raise RuntimeError(f"Initialization error: {e}") from e

s3_client = S3Client(app_config)


# --- API Route Handlers ---
@app.get("/version")
def get_version() -> dict:
    """Returns the application version."""
    display_version = f"{app_config.version}-B:{app_config.commit_hash[:7]}-{app_config.app_env[0].upper()}"
    logger.info(f"Version requested: {display_version}")
    return VersionResponse(version=display_version).model_dump()


@app.post("/documents")
def post_documents_route() -> dict:
    """Handle POST /documents request."""
    bound_handler = functools.partial(
        handle_render_document,
        app=app,
        app_config=app_config,
        s3_client=s3_client,
        logger=logger,
    )
    return bound_handler()


# --- Main Lambda Entry Point ---
@error_handler_middleware
@logging_middleware
def lambda_handler(event: dict, context: LambdaContext) -> dict:
    """Main Lambda handler function.

    Args:
        event: API Gateway proxy event
        context: Lambda context object

    Returns:
        API Gateway proxy response
    """
    return app.resolve(event, context)
