"""Unit tests for the document render handler."""

import json
import unittest
from unittest.mock import MagicMock, PropertyMock, patch

from aws_lambda_powertools.event_handler import APIGatewayHttpResolver
from pydantic import ValidationError

from pdfcomposer.clients.s3 import S3Client
from pdfcomposer.config.app import AppConfig
from pdfcomposer.handlers.render import handle_render_document
from pdfcomposer.middleware.exceptions import BadRequestError
from pdfcomposer.models.api import RenderRequest, RenderResponse


class TestHandleRenderDocument(unittest.TestCase):
    """Test cases for the document render handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_app = MagicMock(spec=APIGatewayHttpResolver)
        self.mock_app.current_event = MagicMock()
        self.mock_config = MagicMock(spec=AppConfig)
        self.mock_s3_client = MagicMock(spec=S3Client)
        self.mock_logger = MagicMock()

        self.service_patch = patch("pdfcomposer.handlers.render.RenderService")
        self.mock_service_class = self.service_patch.start()
        self.mock_service = self.mock_service_class.return_value
        self.mock_service.render.return_value = RenderResponse(
            document_id="doc_0123456789abcdef",
            name="report",
            key="documents/doc_0123456789abcdef.pdf",
            page_count=1,
            size_in_bytes=1024,
            url="https://example.com/doc.pdf",
        )

    def tearDown(self):
        """Tear down test fixtures."""
        self.service_patch.stop()

    def _handle(self):
        return handle_render_document(
            app=self.mock_app,
            app_config=self.mock_config,
            s3_client=self.mock_s3_client,
            logger=self.mock_logger,
        )

    def test_render_success(self):
        """Test that a valid body is rendered and serialized."""
        self.mock_app.current_event.json_body = {
            "name": "report",
            "commands": [{"type": "text", "text": "Hello"}],
        }

        result = self._handle()

        self.assertEqual(result["document_id"], "doc_0123456789abcdef")
        self.assertEqual(result["page_count"], 1)
        self.mock_service_class.assert_called_once_with(
            self.mock_config, self.mock_s3_client
        )
        request = self.mock_service.render.call_args.args[0]
        self.assertIsInstance(request, RenderRequest)
        self.assertEqual(request.commands[0].text, "Hello")

    def test_body_must_be_object(self):
        self.mock_app.current_event.json_body = ["not", "an", "object"]

        with self.assertRaises(BadRequestError):
            self._handle()
        self.mock_service.render.assert_not_called()

    def test_body_must_be_json(self):
        type(self.mock_app.current_event).json_body = PropertyMock(
            side_effect=json.JSONDecodeError("Expecting value", "", 0)
        )

        with self.assertRaises(BadRequestError):
            self._handle()

    def test_invalid_request(self):
        self.mock_app.current_event.json_body = {"name": "report", "commands": []}

        with self.assertRaises(ValidationError):
            self._handle()
        self.mock_service.render.assert_not_called()


if __name__ == "__main__":
    unittest.main()
