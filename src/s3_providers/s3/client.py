"""S3 client creation and off-loop execution of boto3 calls."""

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Callable

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from s3_providers.errors import translate_client_error

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


def create_s3_client(**client_kwargs: Any) -> "S3Client":
    """Create a boto3 S3 client; ``client_kwargs`` go straight to ``boto3.client``."""
    try:
        client = boto3.client("s3", **client_kwargs)
        logger.debug(f"Created s3 client (region={client.meta.region_name})")
        return client
    except Exception as e:
        logger.error(f"Error creating s3 client: {str(e)}")
        raise


async def run_s3_call(bucket_name: str, key: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Run a blocking boto3 call in a worker thread.

    botocore errors are re-raised as ``NotFoundError`` or ``StoreError`` with
    the original exception chained.
    """
    try:
        return await asyncio.to_thread(func, *args, **kwargs)
    except (ClientError, BotoCoreError) as err:
        raise translate_client_error(err, bucket_name, key) from err
