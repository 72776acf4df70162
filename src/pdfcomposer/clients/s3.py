"""Client wrapper for S3 operations."""

from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ..config.app import AppConfig
from ..middleware.exceptions import S3UploadError, StorageError


class S3Client:
    """Client wrapper for S3 operations."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize S3 client.

        Args:
            config: Application configuration
        """
        self.config = config
        self.s3 = boto3.client("s3")
        self.bucket = config.output_bucket_name

    def upload_file(
        self, key: str, content: bytes, content_type: str = "application/pdf"
    ) -> None:
        """Upload a file to S3.

        Args:
            key: S3 object key
            content: File content as bytes
            content_type: MIME type stored with the object

        Raises:
            S3UploadError: If upload fails
        """
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
                ServerSideEncryption="AES256",
            )
        except ClientError as e:
            raise S3UploadError(
                f"Failed to upload file ({key})",
                details={"e": str(e)},
            )

    def get_object_url(
        self,
        key: str,
        expires_in: Optional[int] = 3600,
        response_content_type: Optional[str] = None,
    ) -> str:
        """Get a presigned URL for an S3 object.

        Args:
            key: S3 object key
            expires_in: URL expiration time in seconds (default: 3600 seconds/1 hour)
            response_content_type: Content type for the response (optional)

        Returns:
            Object URL

        Raises:
            StorageError: If URL generation fails
        """
        try:
            expiration = expires_in if expires_in is not None else 3600

            params = {
                "Bucket": self.bucket,
                "Key": key,
                "ResponseContentDisposition": "inline",
            }
            if response_content_type:
                params["ResponseContentType"] = response_content_type

            # SigV4 with virtual-hosted URLs keeps browsers' CORS checks happy
            s3_client_config = Config(
                signature_version="s3v4",
                s3={"addressing_style": "virtual"},
            )
            session = boto3.Session()
            signing_client = session.client(
                "s3",
                config=s3_client_config,
                region_name=self.s3.meta.region_name,
            )

            return signing_client.generate_presigned_url(
                "get_object",
                Params=params,
                ExpiresIn=expiration,
            )
        except ClientError as e:
            raise StorageError(
                "Failed to get object URL",
                code="get_object_url_failed",
                details={"e": str(e)},
            )
