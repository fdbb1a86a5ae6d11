"""
File storage for uploaded payment proofs.
Files are written either to a local directory (served under /uploads) or to
Cloudflare R2; the database only keeps the resulting URL.
"""

import logging
import os
import uuid
from pathlib import Path

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from . import config

logger = logging.getLogger(__name__)

# Path traversal and shell-unfriendly characters are never kept from client filenames
DANGEROUS_CHARS = ["..", "/", "\\", "<", ">", ":", '"', "|", "?", "*"]


class StorageError(Exception):
    """Raised when a file cannot be persisted"""


def safe_extension(filename: str | None) -> str:
    """Return a lowercase extension (with dot) from a client filename, or ''"""
    if not filename:
        return ""
    ext = os.path.splitext(filename)[1].lower()
    if not ext or len(ext) > 10 or any(char in ext for char in DANGEROUS_CHARS):
        return ""
    if not ext[1:].isalnum():
        return ""
    return ext


def generate_key(filename: str | None) -> str:
    return f"{uuid.uuid4().hex}{safe_extension(filename)}"


class LocalFileStore:
    """Stores files on local disk; the web app serves them statically"""

    def __init__(self, upload_dir: str, url_prefix: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def save(self, content: bytes, filename: str | None, content_type: str | None = None) -> str:
        key = generate_key(filename)
        path = self.upload_dir / key
        try:
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"❌ Failed to write upload {key}: {e}")
            raise StorageError("Could not store file") from e
        logger.info(f"📤 Stored upload locally: {key} ({len(content)} bytes)")
        return f"{self.url_prefix}/{key}"


class R2FileStore:
    """Stores files in a Cloudflare R2 bucket through the S3 API"""

    def __init__(self, bucket: str, public_url: str | None = None):
        self.bucket = bucket
        self.public_url = (public_url or "").rstrip("/")
        self.client = boto3.client(
            "s3",
            endpoint_url=f"https://{config.R2_ACCOUNT_ID}.r2.cloudflarestorage.com",
            aws_access_key_id=config.R2_ACCESS_KEY_ID,
            aws_secret_access_key=config.R2_SECRET_ACCESS_KEY,
            config=Config(signature_version="s3v4"),
            region_name="auto",
        )

    def save(self, content: bytes, filename: str | None, content_type: str | None = None) -> str:
        key = f"payment-proofs/{generate_key(filename)}"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type or "application/octet-stream",
            )
        except ClientError as e:
            logger.error(f"❌ Failed to upload {key} to R2: {e}")
            raise StorageError("Could not store file") from e
        logger.info(f"📤 Stored upload in R2: {key}")
        if self.public_url:
            return f"{self.public_url}/{key}"
        return key


def build_file_store():
    """Create the file store selected by STORAGE_BACKEND"""
    if config.STORAGE_BACKEND == "r2":
        return R2FileStore(config.R2_BUCKET_NAME, config.R2_PUBLIC_URL)
    return LocalFileStore(config.UPLOAD_DIR, config.UPLOAD_URL_PREFIX)
