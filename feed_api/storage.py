"""Signed-URL providers for feed media (AWS S3 or Google Cloud Storage)."""

import asyncio
import logging
from abc import ABC, abstractmethod

import boto3
from botocore.config import Config

from feed_api.config import Settings

logger = logging.getLogger(__name__)


class SignedUrlProvider(ABC):
    """Issues time-limited URLs for reading and writing media objects."""

    @abstractmethod
    async def get_download_url(self, key: str) -> str:
        """
        Get a signed GET URL for an object.

        Args:
            key: Object-storage key

        Returns:
            Signed URL permitting a single GET of the object
        """
        pass

    @abstractmethod
    async def get_upload_url(self, key: str) -> str:
        """
        Get a signed PUT URL for an object.

        Args:
            key: Object-storage key the client will upload to

        Returns:
            Signed URL permitting a single PUT of the object
        """
        pass


class S3SignedUrlProvider(SignedUrlProvider):
    """AWS S3 presigned URLs."""

    def __init__(self, settings: Settings):
        self.bucket_name = settings.aws_media_bucket
        self.expiration_seconds = settings.signed_url_expiration_seconds

        if not self.bucket_name:
            raise ValueError("AWS media bucket is required when using S3 storage backend")

        # Use default credential chain unless a named profile is configured
        session = boto3.Session(
            profile_name=settings.aws_profile or None,
            region_name=settings.aws_region,
        )
        self.client = session.client("s3", config=Config(signature_version="s3v4"))

    def _presign(self, operation: str, key: str) -> str:
        # Blocking: credential resolution may hit IMDS or SSO
        return self.client.generate_presigned_url(
            operation,
            Params={"Bucket": self.bucket_name, "Key": key},
            ExpiresIn=self.expiration_seconds,
        )

    async def get_download_url(self, key: str) -> str:
        """Get a presigned get_object URL."""
        return await asyncio.to_thread(self._presign, "get_object", key)

    async def get_upload_url(self, key: str) -> str:
        """Get a presigned put_object URL."""
        return await asyncio.to_thread(self._presign, "put_object", key)


class GCSSignedUrlProvider(SignedUrlProvider):
    """Google Cloud Storage v4 signed URLs."""

    def __init__(self, settings: Settings):
        self.bucket_name = settings.gcs_bucket_name
        self.credentials_file = settings.gcs_credentials_file
        self.expiration_seconds = settings.signed_url_expiration_seconds

        if not self.bucket_name:
            raise ValueError("GCS bucket name is required when using GCS storage backend")

        # Lazy import to avoid requiring google-cloud-storage for S3-only deployments
        try:
            from google.cloud import storage
        except ImportError:
            raise ImportError(
                "google-cloud-storage is required for GCS backend. "
                "Install with: pip install google-cloud-storage"
            )

        if self.credentials_file:
            self.client = storage.Client.from_service_account_json(self.credentials_file)
        else:
            # Use default credentials (from GOOGLE_APPLICATION_CREDENTIALS env var or metadata)
            self.client = storage.Client()

        self.bucket = self.client.bucket(self.bucket_name)

    def _sign(self, method: str, key: str) -> str:
        # Blocking: default credentials sign through the IAM signBlob API
        blob = self.bucket.blob(key)
        return blob.generate_signed_url(
            version="v4",
            expiration=self.expiration_seconds,
            method=method,
        )

    async def get_download_url(self, key: str) -> str:
        """Get a signed GET URL."""
        return await asyncio.to_thread(self._sign, "GET", key)

    async def get_upload_url(self, key: str) -> str:
        """Get a signed PUT URL."""
        return await asyncio.to_thread(self._sign, "PUT", key)


def get_signed_url_provider(settings: Settings) -> SignedUrlProvider:
    """
    Factory function to get the configured signed-URL provider.

    Args:
        settings: Application settings

    Returns:
        Configured provider instance
    """
    logger.info(f"Using {settings.storage_backend} signed-URL provider")
    if settings.storage_backend == "s3":
        return S3SignedUrlProvider(settings)
    elif settings.storage_backend == "gcs":
        return GCSSignedUrlProvider(settings)
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
