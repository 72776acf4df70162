"""Unit tests for the S3 client."""

import unittest
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

from pdfcomposer.clients.s3 import S3Client
from pdfcomposer.config.app import AppConfig
from pdfcomposer.middleware.exceptions import S3UploadError, StorageError


class TestS3Client(unittest.TestCase):
    """Test cases for the S3 client."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_config = MagicMock(spec=AppConfig)
        self.mock_config.output_bucket_name = "test-output-bucket"

        self.client_patch = patch("boto3.client")
        self.mock_boto3_client = self.client_patch.start()
        self.mock_s3 = MagicMock()
        self.mock_boto3_client.return_value = self.mock_s3

        self.client = S3Client(self.mock_config)

    def tearDown(self):
        """Tear down test fixtures."""
        self.client_patch.stop()

    def test_upload_file(self):
        self.client.upload_file("documents/doc_1.pdf", b"%PDF")

        self.mock_s3.put_object.assert_called_once_with(
            Bucket="test-output-bucket",
            Key="documents/doc_1.pdf",
            Body=b"%PDF",
            ContentType="application/pdf",
            ServerSideEncryption="AES256",
        )

    def test_upload_file_error(self):
        self.mock_s3.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Denied"}}, "PutObject"
        )

        with self.assertRaises(S3UploadError) as context:
            self.client.upload_file("documents/doc_1.pdf", b"%PDF")

        self.assertEqual(context.exception.code, "S3_UPLOAD_FAILED")

    @patch("boto3.Session")
    def test_get_object_url(self, mock_session_class):
        signing_client = mock_session_class.return_value.client.return_value
        signing_client.generate_presigned_url.return_value = "https://signed"

        url = self.client.get_object_url(
            "documents/doc_1.pdf", response_content_type="application/pdf"
        )

        self.assertEqual(url, "https://signed")
        signing_client.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={
                "Bucket": "test-output-bucket",
                "Key": "documents/doc_1.pdf",
                "ResponseContentDisposition": "inline",
                "ResponseContentType": "application/pdf",
            },
            ExpiresIn=3600,
        )

    @patch("boto3.Session")
    def test_get_object_url_error(self, mock_session_class):
        signing_client = mock_session_class.return_value.client.return_value
        signing_client.generate_presigned_url.side_effect = ClientError(
            {"Error": {"Code": "500", "Message": "Boom"}}, "GetObject"
        )

        with self.assertRaises(StorageError):
            self.client.get_object_url("documents/doc_1.pdf")


if __name__ == "__main__":
    unittest.main()
