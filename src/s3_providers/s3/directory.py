"""Directory emulation over the flat S3 key namespace."""

import asyncio
import logging
from typing import TYPE_CHECKING, AsyncIterator, Callable, Iterator, Optional

from s3_providers.s3.keys import directory_prefix
from s3_providers.s3.read_objects import fetch_s3_objects_page

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import ListObjectsV2OutputTypeDef

logger = logging.getLogger(__name__)

IgnoreFilter = Callable[[str], bool]


def child_keys_in_page(
    response: "ListObjectsV2OutputTypeDef",
    prefix: str,
    recursive: bool = True,
    ignore_filter: Optional[IgnoreFilter] = None,
) -> Iterator[str]:
    """
    Yield the keys of one listing page that belong to the directory ``prefix``.

    The directory's own marker object is skipped. When ``recursive`` is False,
    keys nested deeper than one level are skipped. Keys matched by
    ``ignore_filter`` are skipped.
    """
    for item in response.get("Contents", []):
        key = item["Key"]
        if key == prefix and key.endswith("/"):
            continue

        relative_path = key[len(prefix):] if key.startswith(prefix) else key
        if not recursive and "/" in relative_path:
            continue

        if ignore_filter is not None and ignore_filter(key):
            continue
        yield key


async def iter_child_keys(
    s3_client: "S3Client",
    bucket_name: str,
    key: str,
    recursive: bool = True,
    ignore_filter: Optional[IgnoreFilter] = None,
) -> AsyncIterator[str]:
    """
    Lazily list the keys under directory ``key``, following continuation tokens.

    Each page is fetched in a worker thread when the previous one has been
    consumed. Order is whatever S3 returns; a new call restarts from the
    first page.
    """
    prefix = directory_prefix(key)
    continuation_token = None
    page_count = 0

    while True:
        response = await asyncio.to_thread(
            fetch_s3_objects_page,
            bucket_name,
            prefix=prefix,
            continuation_token=continuation_token,
            s3_client=s3_client,
        )
        page_count += 1
        for child_key in child_keys_in_page(response, prefix, recursive, ignore_filter):
            yield child_key

        continuation_token = response.get("NextContinuationToken")
        if not continuation_token:
            break

    logger.debug(f"Listed s3://{bucket_name}/{prefix} in {page_count} page(s)")


def directory_exists(s3_client: "S3Client", bucket_name: str, key: str) -> bool:
    """
    Infer whether ``key`` names a directory.

    S3 has no directory objects, so a directory exists when at least one key
    (or common prefix) lives under ``key + "/"``. The bucket root always exists.
    """
    if key == "":
        return True

    response = fetch_s3_objects_page(
        bucket_name,
        prefix=directory_prefix(key),
        max_keys=1,
        s3_client=s3_client,
    )
    return response.get("KeyCount", 0) > 0 or len(response.get("CommonPrefixes", [])) > 0
