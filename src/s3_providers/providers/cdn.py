"""
S3 backed CDN provider.
"""

import logging
import random
import re
import string
import time
from typing import Dict, Optional

from s3_providers.errors import ConfigurationError, NotFoundError, S3ProviderError
from s3_providers.providers.base import CDNProvider
from s3_providers.s3.client import create_s3_client, run_s3_call
from s3_providers.s3.delete_objects import delete_s3_object
from s3_providers.s3.read_objects import head_s3_object, object_exists_in_s3
from s3_providers.s3.write_objects import upload_s3_object
from s3_providers.schemas import DeleteResult, UploadResult
from s3_providers.settings import Settings, get_settings

logger = logging.getLogger(__name__)

DEFAULT_URL_PATTERN = re.compile(r"amazonaws\.com/(.+)$")
KEY_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
KEY_SUFFIX_LENGTH = 6


def generate_object_key() -> str:
    """
    Generate a key for uploads without a filename: ``{epoch_ms}-{random suffix}``.

    The suffix comes from ``random``; keys are unlikely to collide but are
    guessable.
    """
    suffix = "".join(random.choices(KEY_SUFFIX_ALPHABET, k=KEY_SUFFIX_LENGTH))
    return f"{int(time.time() * 1000)}-{suffix}"


class S3CDNProvider(CDNProvider):
    """
    CDN provider that stores uploads in an S3 bucket.

    Objects are served from ``base_url`` (a CloudFront distribution, custom
    domain, ...) or from the bucket's virtual-hosted URL. ``delete``,
    ``exists`` and ``get_metadata`` never raise; failures are logged and
    reported through their return values.
    """

    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        base_url: Optional[str] = None,
    ):
        if not bucket:
            raise ConfigurationError("S3CDNProvider requires a bucket parameter", {"field": "bucket"})
        if not access_key_id:
            raise ConfigurationError("S3CDNProvider requires access_key_id", {"field": "access_key_id"})
        if not secret_access_key:
            raise ConfigurationError(
                "S3CDNProvider requires secret_access_key", {"field": "secret_access_key"}
            )
        if not region:
            raise ConfigurationError("S3CDNProvider requires region", {"field": "region"})

        self._bucket = bucket
        self._base_url = (base_url or f"https://{bucket}.s3.amazonaws.com").rstrip("/")
        self._s3_client = create_s3_client(
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )
        logger.info(f"S3CDNProvider initialized for bucket {bucket} at {self._base_url}")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "S3CDNProvider":
        """Build a provider from ``S3_BUCKET_NAME``, ``CDN_BASE_URL`` and the AWS settings."""
        settings = settings or get_settings()
        return cls(
            bucket=settings.s3_bucket_name,
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            base_url=settings.cdn_base_url,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for_key(self, key: str) -> str:
        return f"{self._base_url}/{key}"

    def extract_key_from_url(self, url: str) -> str:
        """
        Map a URL produced by this provider back to its key.

        URLs under ``base_url`` have the prefix stripped; other S3 URLs are
        matched on ``amazonaws.com/<key>``. Anything else is taken as a key.
        """
        if url.startswith(self._base_url):
            return url[len(self._base_url) + 1:]

        match = DEFAULT_URL_PATTERN.search(url)
        return match.group(1) if match else url

    async def upload(
        self,
        data: bytes,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        metadata: Optional[Dict[str, str]] = None,
    ) -> UploadResult:
        """
        Upload ``data`` and return its public URL.

        Args:
            data: Object body
            filename: Object key. A timestamped key is generated when omitted.
            content_type: MIME type stored with the object
            metadata: User metadata stored with the object and echoed back

        Raises:
            S3ProviderError: If S3 rejects the upload
        """
        key = filename or generate_object_key()
        await run_s3_call(
            self._bucket,
            key,
            upload_s3_object,
            self._bucket,
            key,
            data,
            content_type=content_type,
            metadata=metadata,
            s3_client=self._s3_client,
        )

        url = self.url_for_key(key)
        logger.info(f"Uploaded {len(data)} bytes to {url}")
        return UploadResult(url=url, id=key, metadata=metadata)

    async def delete(self, url: str) -> DeleteResult:
        try:
            key = self.extract_key_from_url(url)
            found = await run_s3_call(
                self._bucket, key, object_exists_in_s3, self._bucket, key, s3_client=self._s3_client
            )
            if not found:
                raise NotFoundError(f"Object not found: {key}", {"bucket": self._bucket, "key": key})

            await run_s3_call(self._bucket, key, delete_s3_object, self._bucket, key, s3_client=self._s3_client)
            logger.info(f"Deleted {url}")
            return DeleteResult(success=True, message=f"Successfully deleted {key}")
        except S3ProviderError as err:
            logger.warning(f"Failed to delete {url}: {err.message}")
            return DeleteResult(success=False, message=f"Failed to delete: {err.message}")

    async def exists(self, url: str) -> bool:
        key = self.extract_key_from_url(url)
        try:
            return await run_s3_call(
                self._bucket, key, object_exists_in_s3, self._bucket, key, s3_client=self._s3_client
            )
        except S3ProviderError as err:
            logger.warning(f"exists check failed for {url}: {err.message}")
            return False

    async def get_metadata(self, url: str) -> Optional[Dict[str, str]]:
        """Return the user metadata of the object at ``url``, or None if it cannot be read."""
        key = self.extract_key_from_url(url)
        try:
            response = await run_s3_call(
                self._bucket, key, head_s3_object, self._bucket, key, s3_client=self._s3_client
            )
        except S3ProviderError as err:
            logger.debug(f"No metadata for {url}: {err.message}")
            return None
        return response.get("Metadata", {})
