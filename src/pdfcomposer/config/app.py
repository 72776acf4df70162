import os
from pathlib import Path

from aws_lambda_powertools.logging import Logger
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = Logger()


class AppConfig(BaseModel):
    """Application configuration."""

    app_env: str = Field(
        description="Application environment (local, dev or prod)"
    )
    version: str = Field(description="Application version")
    commit_hash: str = Field(description="Commit hash")
    output_bucket_name: str = Field(
        default="pdf-composer-output",
        description="Name of the S3 bucket receiving rendered documents",
    )
    output_prefix: str = Field(
        default="documents",
        description="Key prefix for rendered documents in the output bucket",
    )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables.

        In 'local' mode (default), it first loads variables from a .env file.
        In 'dev' and 'prod' modes, it reads directly from environment variables.
        """

        app_env = os.getenv("APP_ENV", "local").lower()
        logger.debug("App environment", extra={"app_env": app_env})
        if app_env == "local":
            dotenv_path = Path(".env")
            load_dotenv(dotenv_path=dotenv_path, override=True)
            logger.debug("Loaded .env file", extra={"dotenv_path": dotenv_path})
        elif app_env not in ["dev", "prod"]:
            raise ValueError(f"Invalid app environment: {app_env}")

        version = os.getenv("VERSION", "unknown")
        commit_hash = os.getenv("COMMIT_HASH", "unknown")
        output_bucket_name = os.getenv("OUTPUT_BUCKET_NAME", "pdf-composer-output")
        output_prefix = os.getenv("OUTPUT_PREFIX", "documents")

        return cls(
            app_env=app_env,
            version=version,
            commit_hash=commit_hash,
            output_bucket_name=output_bucket_name,
            output_prefix=output_prefix,
        )
