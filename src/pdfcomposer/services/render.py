"""Service rendering API requests into stored documents."""

import base64
import binascii
from pathlib import PurePosixPath

from ..clients.s3 import S3Client
from ..config.app import AppConfig
from ..config.layout import DEFAULT_LAYOUT, LayoutConfig
from ..middleware.exceptions import BadRequestError
from ..middleware.logging import logger
from ..models.api import (
    CursorCommand,
    HeadingCommand,
    ImageCommand,
    PageBreakCommand,
    RectCommand,
    RenderCommand,
    RenderRequest,
    RenderResponse,
    TableCommand,
    TextCommand,
)
from .composer import DocumentComposer
from .image_source import fetch_image
from .output import S3OutputSink


class RenderService:
    """Service for document rendering operations."""

    def __init__(
        self,
        config: AppConfig,
        s3_client: S3Client,
        layout: LayoutConfig = DEFAULT_LAYOUT,
    ) -> None:
        """Initialize render service.

        Args:
            config: Application configuration
            s3_client: S3 client for the output bucket
            layout: Page geometry and style tables
        """
        self.config = config
        self.s3_client = s3_client
        self.layout = layout

    def render(self, request: RenderRequest) -> RenderResponse:
        """Render a request into a PDF, store it and describe the result.

        Args:
            request: Validated render request

        Returns:
            RenderResponse with the stored key and a download URL

        Raises:
            BadRequestError: If inline image data is not valid base64
            DocumentCompositionError: If a command cannot be drawn
            URLDownloadError: If an image URL cannot be fetched
            StorageError: If the upload fails
        """
        composer = DocumentComposer(self.layout)
        for index, command in enumerate(request.commands):
            logger.debug("Applying command", extra={"index": index, "type": command.type})
            self.apply(composer, command)

        sink = S3OutputSink(self.s3_client, self.config.output_prefix)
        key = composer.finalize(sink)
        output = composer.render()

        return RenderResponse(
            document_id=PurePosixPath(key).stem,
            name=request.name,
            key=key,
            page_count=composer.document.page_count,
            size_in_bytes=len(output),
            url=self.s3_client.get_object_url(
                key, response_content_type="application/pdf"
            ),
        )

    def apply(self, composer: DocumentComposer, command: RenderCommand) -> None:
        """Apply a single drawing command to ``composer``."""
        if isinstance(command, TextCommand):
            composer.place_text(
                command.text,
                x=command.x,
                y=command.y,
                max_width=command.max_width,
                font_size=command.font_size,
                style=command.style,
                wrap_x=command.wrap_x,
                color=command.color,
                font_family=command.font_family,
                strikethrough=command.strikethrough,
                rotation=command.rotation,
                scale_x=command.scale_x,
                scale_y=command.scale_y,
                opacity=command.opacity,
            )
        elif isinstance(command, HeadingCommand):
            composer.place_heading(
                command.text,
                level=command.level,
                x=command.x,
                y=command.y,
                color=command.color,
                font_family=command.font_family,
            )
        elif isinstance(command, ImageCommand):
            data, image_format = self._image_bytes(command)
            composer.place_image(
                data,
                image_format,
                x=command.x,
                y=command.y,
                width=command.width,
                height=command.height,
                identifier=command.identifier,
            )
        elif isinstance(command, RectCommand):
            composer.place_rect(
                command.x,
                command.y,
                command.width,
                command.height,
                mode=command.mode,
                stroke_color=command.stroke_color,
                fill_color=command.fill_color,
                stroke_width=command.stroke_width,
            )
        elif isinstance(command, TableCommand):
            composer.draw_table(command.columns, command.rows, command.options)
        elif isinstance(command, PageBreakCommand):
            composer.add_page()
        elif isinstance(command, CursorCommand):
            composer.cursor_y = command.y

    @staticmethod
    def _image_bytes(command: ImageCommand) -> tuple[bytes, str | None]:
        if command.url is not None:
            return fetch_image(str(command.url))
        try:
            return base64.b64decode(command.data_base64, validate=True), command.format
        except binascii.Error as e:
            raise BadRequestError(
                "Image data is not valid base64",
                details={"identifier": command.identifier, "e": str(e)},
            )
