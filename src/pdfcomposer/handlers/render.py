"""Handler for document rendering (POST /documents).

The request body is a JSON list of drawing commands; the rendered PDF is
stored in the output bucket and described in the response.
"""

import json
from typing import Any, Dict

from aws_lambda_powertools.event_handler import APIGatewayHttpResolver
from aws_lambda_powertools.logging import Logger

from ..clients.s3 import S3Client
from ..config.app import AppConfig
from ..middleware.exceptions import BadRequestError
from ..models.api import RenderRequest
from ..services.render import RenderService


def handle_render_document(
    app: APIGatewayHttpResolver,
    app_config: AppConfig,
    s3_client: S3Client,
    logger: Logger,
) -> Dict[str, Any]:
    """Handle POST /documents requests.

    Args:
        app: The API Gateway resolver instance
        app_config: Application configuration
        s3_client: S3 client for document storage
        logger: Logger instance

    Returns:
        Serialized RenderResponse

    Raises:
        BadRequestError: If the body is not JSON
        ValidationError: If the body does not describe a render request
        DocumentCompositionError: If a command cannot be drawn
        StorageError: If storage operations fail
    """
    try:
        body = app.current_event.json_body
    except (json.JSONDecodeError, TypeError) as e:
        raise BadRequestError("Request body must be JSON", details={"e": str(e)})
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")

    request = RenderRequest.model_validate(body)
    logger.info(
        "Rendering document",
        extra={"name": request.name, "commands": len(request.commands)},
    )

    response = RenderService(app_config, s3_client).render(request)

    logger.info(
        f"Document {response.document_id} rendered",
        extra={"key": response.key, "page_count": response.page_count},
    )
    return response.model_dump(mode="json")
