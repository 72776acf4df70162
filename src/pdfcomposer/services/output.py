"""Output sinks receiving rendered documents."""

import hashlib
import uuid
from pathlib import Path
from typing import Protocol

from ..clients.s3 import S3Client
from ..middleware.logging import logger


class OutputSink(Protocol):
    """Durable destination of a rendered document."""

    def write(self, content: bytes) -> str:
        """Store ``content`` and return an identifier for it.

        Args:
            content: Complete PDF bytes
        Returns:
            Identifier assigned by the sink.
        Raises:
            StorageError: If the write fails.
        """
        ...


def generate_document_id_from_content(content: bytes) -> str:
    """Generate a document ID based on content hash.

    Args:
        content: The binary content to hash

    Returns:
        A document ID based on content hash
    """
    hash_obj = hashlib.sha256(content)
    return f"doc_{hash_obj.hexdigest()[:16]}"


def generate_document_id() -> str:
    """Generate a unique document ID.

    Returns:
        A unique document ID string
    """
    return f"doc_{uuid.uuid4().hex[:8]}"


class S3OutputSink:
    """Writes documents to the output bucket; the identifier is the object key."""

    def __init__(self, s3_client: S3Client, prefix: str = "documents") -> None:
        """Initialize the sink.

        Args:
            s3_client: S3 client bound to the output bucket
            prefix: Key prefix of rendered documents
        """
        self.s3_client = s3_client
        self.prefix = prefix.strip("/")

    def key_for(self, content: bytes) -> str:
        document_id = generate_document_id_from_content(content)
        return f"{self.prefix}/{document_id}.pdf" if self.prefix else f"{document_id}.pdf"

    def write(self, content: bytes) -> str:
        key = self.key_for(content)
        # StorageError from the client propagates unchanged
        self.s3_client.upload_file(key, content)
        logger.debug("Document uploaded", extra={"key": key, "size": len(content)})
        return key


class LocalFileSink:
    """Writes documents into a local directory; the identifier is the file path."""

    def __init__(self, directory: str | Path, content_addressed: bool = True) -> None:
        self.directory = Path(directory)
        self.content_addressed = content_addressed

    def write(self, content: bytes) -> str:
        document_id = (
            generate_document_id_from_content(content)
            if self.content_addressed
            else generate_document_id()
        )
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{document_id}.pdf"
        path.write_bytes(content)
        logger.debug("Document written to disk", extra={"path": str(path)})
        return str(path)
