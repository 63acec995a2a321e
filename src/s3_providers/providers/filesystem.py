"""
S3 backed virtual filesystem provider.
"""

import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Union

from botocore.exceptions import BotoCoreError, ClientError

from s3_providers.errors import (
    AlreadyExistsError,
    ConfigurationError,
    InvalidPathError,
    NotFoundError,
    PathTraversalError,
    S3ProviderError,
    UnsupportedOperationError,
    translate_client_error,
)
from s3_providers.providers.base import FileSystemProvider
from s3_providers.s3.client import create_s3_client, run_s3_call
from s3_providers.s3.delete_objects import delete_s3_object
from s3_providers.s3.directory import directory_exists, iter_child_keys
from s3_providers.s3.keys import directory_prefix, normalize_key, to_absolute_path, to_relative_path
from s3_providers.s3.read_objects import fetch_s3_object, head_s3_object, object_exists_in_s3
from s3_providers.s3.write_objects import copy_s3_object, upload_s3_object
from s3_providers.schemas import StatResult
from s3_providers.settings import Settings, get_settings

logger = logging.getLogger(__name__)

BUFFER_ENCODING = "buffer"


class S3FileSystemProvider(FileSystemProvider):
    """
    Filesystem provider rooted at one S3 bucket.

    Paths are normalized to keys relative to the bucket root (see
    ``normalize_key``); directories are emulated with key prefixes and
    zero-byte ``key/`` marker objects.

    Every operation is a coroutine. boto3 is blocking, so each S3 call runs in
    a worker thread and the event loop is never held while waiting on the
    network. The boto3 client is created once and shared by those threads.

    Composite operations (``append_file``, ``copy`` without overwrite,
    ``rename``, ``create_directory``) are several independent requests with no
    isolation; concurrent writers to the same key race at the store.
    """

    def __init__(self, bucket_name: str, client_config: Optional[Dict[str, Any]] = None):
        """
        Args:
            bucket_name: Bucket the filesystem is rooted at
            client_config: Keyword arguments for ``boto3.client("s3", ...)``,
                e.g. ``region_name``, ``endpoint_url`` or a botocore ``config``
        """
        if not bucket_name:
            raise ConfigurationError(
                "S3FileSystemProvider requires a 'bucket_name'.",
                {"field": "bucket_name"},
            )
        self._bucket_name = bucket_name
        self._s3_client = create_s3_client(**(client_config or {}))
        logger.info(f"S3FileSystemProvider initialized for bucket: {bucket_name}")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "S3FileSystemProvider":
        """Build a provider from ``S3_BUCKET_NAME`` and the AWS settings."""
        settings = settings or get_settings()
        if not settings.s3_bucket_name:
            raise ConfigurationError(
                "S3_BUCKET_NAME must be set to build an S3FileSystemProvider.",
                {"field": "s3_bucket_name"},
            )
        return cls(settings.s3_bucket_name, settings.s3_client_kwargs())

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    # Path helpers

    def get_base_directory(self) -> str:
        return f"s3://{self._bucket_name}/"

    def relative_or_absolute_path_to_absolute_path(self, path: str) -> str:
        return to_absolute_path(self._bucket_name, path)

    def relative_or_absolute_path_to_relative_path(self, path: str) -> str:
        return to_relative_path(self._bucket_name, path)

    def _require_key(self, path: str, purpose: str = "") -> str:
        """Normalize ``path`` and reject the bucket root."""
        key = normalize_key(path)
        if not key:
            suffix = f" for {purpose}" if purpose else ""
            raise InvalidPathError(f"Path results in an empty S3 key{suffix}.", {"path": path})
        return key

    async def _call(self, key: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        return await run_s3_call(self._bucket_name, key, func, *args, **kwargs)

    # File operations

    async def write_file(self, path: str, content: Union[str, bytes]) -> bool:
        key = self._require_key(path)
        await self._call(key, upload_s3_object, self._bucket_name, key, content, s3_client=self._s3_client)
        logger.info(f"Wrote s3://{self._bucket_name}/{key}")
        return True

    async def append_file(self, path: str, content: Union[str, bytes]) -> bool:
        """
        Append ``content`` to a file, creating it when missing.

        This is a read followed by a full rewrite; two concurrent appenders can
        lose one of the updates.
        """
        try:
            existing = await self.read_file(path, encoding=None)
        except NotFoundError:
            return await self.write_file(path, content)

        if isinstance(content, str):
            content = content.encode("utf-8")
        return await self.write_file(path, existing + content)

    async def read_file(self, path: str, encoding: Optional[str] = "utf-8") -> Union[str, bytes]:
        """
        Read a file.

        Args:
            path: File path
            encoding: Text encoding used to decode the body. ``None`` or
                ``"buffer"`` return the raw bytes.

        Raises:
            NotFoundError: If no object exists at ``path``
        """
        key = self._require_key(path)
        body = await self._call(key, fetch_s3_object, self._bucket_name, key, s3_client=self._s3_client)
        logger.debug(f"Read {len(body)} bytes from s3://{self._bucket_name}/{key}")

        if encoding is None or encoding == BUFFER_ENCODING:
            return body
        return body.decode(encoding)

    async def delete_file(self, path: str) -> bool:
        key = self._require_key(path, "deletion")
        # delete_object succeeds for missing keys
        found = await self._call(key, object_exists_in_s3, self._bucket_name, key, s3_client=self._s3_client)
        if not found:
            raise NotFoundError(f"Path not found: {path}", {"bucket": self._bucket_name, "key": key})

        await self._call(key, delete_s3_object, self._bucket_name, key, s3_client=self._s3_client)
        logger.info(f"Deleted s3://{self._bucket_name}/{key}")
        return True

    async def exists(self, path: str) -> bool:
        """
        Check whether a file exists. Never raises.

        Any failure, including an invalid path or an S3 error other than a
        missing key, is reported as ``False``. Use ``stat`` when the cause
        matters.
        """
        try:
            key = normalize_key(path)
        except PathTraversalError as err:
            logger.debug(f"exists({path!r}) is False: {err}")
            return False

        if not key:
            return False

        try:
            return await self._call(
                key, object_exists_in_s3, self._bucket_name, key, s3_client=self._s3_client
            )
        except S3ProviderError as err:
            logger.warning(f"exists check failed for s3://{self._bucket_name}/{key}: {str(err)}")
            return False

    async def stat(self, path: str) -> StatResult:
        """
        Return file or directory attributes.

        A ``head_object`` is tried first. When there is no object at the key,
        the path is a directory if any key lives under ``key/``.

        Raises:
            NotFoundError: If neither an object nor a directory exists
        """
        key = normalize_key(path)
        absolute_path = self.relative_or_absolute_path_to_absolute_path(path)

        if key:
            try:
                response = await self._call(
                    key, head_s3_object, self._bucket_name, key, s3_client=self._s3_client
                )
                return StatResult(
                    path=path,
                    absolute_path=absolute_path,
                    is_file=True,
                    is_directory=False,
                    is_symbolic_link=False,
                    size=response.get("ContentLength", 0),
                    modified=response.get("LastModified"),
                    created=response.get("LastModified"),
                    accessed=response.get("LastModified"),
                )
            except NotFoundError:
                pass

        if await self._call(key, directory_exists, self._s3_client, self._bucket_name, key):
            return StatResult(
                path=path,
                absolute_path=absolute_path,
                is_file=False,
                is_directory=True,
                is_symbolic_link=False,
                size=0,
            )
        raise NotFoundError(f"Path not found: {path}", {"bucket": self._bucket_name, "key": key})

    async def copy(self, source_path: str, destination_path: str, overwrite: bool = False) -> bool:
        source_key = self._require_key(source_path, "copy source")
        destination_key = self._require_key(destination_path, "copy destination")

        if not overwrite and await self.exists(destination_path):
            raise AlreadyExistsError(
                f"Destination already exists: {destination_path}",
                {"bucket": self._bucket_name, "key": destination_key},
            )

        await self._call(
            source_key,
            copy_s3_object,
            self._bucket_name,
            source_key,
            destination_key,
            s3_client=self._s3_client,
        )
        logger.info(f"Copied s3://{self._bucket_name}/{source_key} to {destination_key}")
        return True

    async def rename(self, old_path: str, new_path: str) -> bool:
        """Copy then delete. A failure in between leaves both objects in place."""
        await self.copy(old_path, new_path, overwrite=True)
        await self.delete_file(old_path)
        return True

    # Directory operations

    async def create_directory(self, path: str, recursive: bool = False) -> bool:
        """
        Create a directory marker object (``key/``).

        ``recursive`` is accepted for interface compatibility: parent
        directories exist implicitly through the key prefix.
        """
        key = normalize_key(path)
        if key == "":
            return True
        marker_key = directory_prefix(key)

        try:
            existing = await self.stat(marker_key)
            if existing.is_directory:
                return True
        except NotFoundError:
            pass

        await self._call(
            marker_key, upload_s3_object, self._bucket_name, marker_key, b"", s3_client=self._s3_client
        )
        logger.info(f"Created directory marker s3://{self._bucket_name}/{marker_key}")
        return True

    async def get_directory_tree(
        self,
        path: str,
        recursive: bool = True,
        ignore_filter: Optional[Callable[[str], bool]] = None,
    ) -> AsyncIterator[str]:
        """
        Yield the keys below ``path``.

        Args:
            path: Directory path, ``""`` for the bucket root
            recursive: Include keys in nested directories
            ignore_filter: Called with each key; keys it returns True for are skipped
        """
        key = normalize_key(path)
        try:
            async for child_key in iter_child_keys(
                self._s3_client, self._bucket_name, key, recursive=recursive, ignore_filter=ignore_filter
            ):
                yield child_key
        except (ClientError, BotoCoreError) as err:
            raise translate_client_error(err, self._bucket_name, key) from err

    # Unsupported operations

    async def chmod(self, path: str, mode: int) -> bool:
        raise UnsupportedOperationError("Method chmod is not supported by S3FileSystem.")

    async def watch(self, directory: str, **options: Any) -> Any:
        raise UnsupportedOperationError("Method watch is not supported by S3FileSystem.")

    async def execute_command(self, command: Union[str, List[str]], **options: Any) -> Any:
        raise UnsupportedOperationError("Method execute_command is not supported by S3FileSystem.")

    async def glob(self, pattern: str, **options: Any) -> List[str]:
        raise UnsupportedOperationError(
            "Method glob is not fully supported by S3FileSystem. "
            "Only prefix-based listing is available via get_directory_tree."
        )

    async def grep(self, search: Union[str, List[str]], **options: Any) -> List[Any]:
        raise UnsupportedOperationError(
            "Method grep is not supported by S3FileSystem. "
            "Consider using S3 Select for specific use cases or downloading files for local search."
        )
