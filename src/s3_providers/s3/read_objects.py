"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

from typing import TYPE_CHECKING, Optional

import boto3
from botocore.exceptions import ClientError

from s3_providers.errors import is_not_found

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_s3.type_defs import HeadObjectOutputTypeDef, ListObjectsV2OutputTypeDef


def object_exists_in_s3(bucket_name: str, object_key: str, s3_client: Optional["S3Client"] = None) -> bool:
    """
    Check if an object exists in the S3 bucket using head_object.

    :param bucket_name: Name of the S3 bucket.
    :param object_key: Key of the object to check.
    :param s3_client: Optional S3 client to use. If not provided, a new client will be created.

    :return: True if the object exists, False otherwise.
    :raises ClientError: for failures other than a missing key.
    """
    s3_client = s3_client or boto3.client("s3")
    try:
        s3_client.head_object(Bucket=bucket_name, Key=object_key)
        return True
    except ClientError as err:
        if is_not_found(err):
            return False
        raise


def head_s3_object(bucket_name: str, object_key: str, s3_client: Optional["S3Client"] = None) -> "HeadObjectOutputTypeDef":
    """Fetch the headers (size, last modified, metadata) of an object."""
    s3_client = s3_client or boto3.client("s3")
    return s3_client.head_object(Bucket=bucket_name, Key=object_key)


def fetch_s3_object(bucket_name: str, object_key: str, s3_client: Optional["S3Client"] = None) -> bytes:
    """
    Fetch the full body of an object.

    :param bucket_name: Name of the S3 bucket.
    :param object_key: Key of the object to fetch.
    :param s3_client: Optional S3 client to use. If not provided, a new client will be created.

    :return: The object body as bytes.
    """
    s3_client = s3_client or boto3.client("s3")
    response = s3_client.get_object(Bucket=bucket_name, Key=object_key)
    body = response["Body"]
    try:
        return body.read()
    finally:
        body.close()


def fetch_s3_objects_page(
    bucket_name: str,
    prefix: str = "",
    continuation_token: Optional[str] = None,
    max_keys: Optional[int] = None,
    delimiter: Optional[str] = None,
    s3_client: Optional["S3Client"] = None,
) -> "ListObjectsV2OutputTypeDef":
    """
    Fetch one page of a ``list_objects_v2`` listing.

    :param bucket_name: Name of the S3 bucket.
    :param prefix: Only keys starting with this prefix are returned.
    :param continuation_token: ``NextContinuationToken`` of the previous page.
    :param max_keys: Maximum number of entries in the page (S3 caps this at 1000).
    :param delimiter: Group keys sharing a prefix up to this character into ``CommonPrefixes``.
    :param s3_client: Optional S3 client to use. If not provided, a new client will be created.

    :return: The raw response; ``NextContinuationToken`` is absent on the last page.
    """
    s3_client = s3_client or boto3.client("s3")
    list_kwargs = {"Bucket": bucket_name, "Prefix": prefix}
    if continuation_token:
        list_kwargs["ContinuationToken"] = continuation_token
    if max_keys is not None:
        list_kwargs["MaxKeys"] = max_keys
    if delimiter:
        list_kwargs["Delimiter"] = delimiter
    return s3_client.list_objects_v2(**list_kwargs)
