"""Functions for writing objects to an S3 bucket--the "C" and "U" in CRUD."""

from typing import TYPE_CHECKING, Dict, Optional, Union

import boto3

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: Union[bytes, str],
    content_type: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
    s3_client: Optional["S3Client"] = None,
) -> None:
    """
    Upload an object to an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: The content of the object. ``str`` is sent UTF-8 encoded.
    :param content_type: The MIME type of the object, e.g. "text/plain". Left to S3 when omitted.
    :param metadata: Optional user metadata stored as ``x-amz-meta-*`` headers.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or boto3.client("s3")
    if isinstance(file_content, str):
        file_content = file_content.encode("utf-8")

    put_kwargs = {
        "Bucket": bucket_name,
        "Key": object_key,
        "Body": file_content,
    }
    if content_type:
        put_kwargs["ContentType"] = content_type
    if metadata:
        put_kwargs["Metadata"] = metadata
    s3_client.put_object(**put_kwargs)


def copy_s3_object(
    bucket_name: str,
    source_key: str,
    destination_key: str,
    s3_client: Optional["S3Client"] = None,
) -> None:
    """
    Server-side copy of an object within one bucket.

    :param bucket_name: The name of the S3 bucket.
    :param source_key: key of the object to copy.
    :param destination_key: key the copy is written to. Existing objects are replaced.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or boto3.client("s3")
    s3_client.copy_object(
        Bucket=bucket_name,
        CopySource={"Bucket": bucket_name, "Key": source_key},
        Key=destination_key,
    )
