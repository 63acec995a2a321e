import pytest
from botocore.exceptions import ClientError

from s3_providers.s3.delete_objects import delete_s3_object
from s3_providers.s3.read_objects import (
    fetch_s3_object,
    fetch_s3_objects_page,
    head_s3_object,
    object_exists_in_s3,
)
from s3_providers.s3.write_objects import copy_s3_object, upload_s3_object
from tests.consts import TEST_BUCKET_NAME

TEST_FILE_PATH = "test.txt"
TEST_FILE_CONTENT = b"Hello, world!"
TEST_FILE_CONTENT_TYPE = "text/plain"


def test_upload_s3_object_stores_content_type_and_metadata(s3_client):
    upload_s3_object(
        TEST_BUCKET_NAME,
        TEST_FILE_PATH,
        TEST_FILE_CONTENT,
        content_type=TEST_FILE_CONTENT_TYPE,
        metadata={"owner": "tests"},
        s3_client=s3_client,
    )

    response = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=TEST_FILE_PATH)
    assert response["Body"].read() == TEST_FILE_CONTENT
    assert response["ContentType"] == TEST_FILE_CONTENT_TYPE
    assert response["Metadata"] == {"owner": "tests"}


def test_upload_s3_object_encodes_text(s3_client):
    upload_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, "héllo", s3_client=s3_client)

    assert fetch_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, s3_client=s3_client) == "héllo".encode("utf-8")


def test_object_exists_in_s3(s3_client):
    assert not object_exists_in_s3(TEST_BUCKET_NAME, TEST_FILE_PATH, s3_client=s3_client)

    upload_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, TEST_FILE_CONTENT, s3_client=s3_client)

    assert object_exists_in_s3(TEST_BUCKET_NAME, TEST_FILE_PATH, s3_client=s3_client)


def test_object_exists_in_s3_raises_for_other_errors():
    class DeniedClient:
        def head_object(self, **kwargs):
            raise ClientError(
                {"Error": {"Code": "403", "Message": "Forbidden"}, "ResponseMetadata": {"HTTPStatusCode": 403}},
                "HeadObject",
            )

    with pytest.raises(ClientError):
        object_exists_in_s3(TEST_BUCKET_NAME, TEST_FILE_PATH, s3_client=DeniedClient())


def test_head_s3_object(s3_client):
    upload_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, TEST_FILE_CONTENT, s3_client=s3_client)

    response = head_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, s3_client=s3_client)

    assert response["ContentLength"] == len(TEST_FILE_CONTENT)
    assert response["LastModified"] is not None


def test_copy_and_delete_s3_object(s3_client):
    upload_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, TEST_FILE_CONTENT, s3_client=s3_client)

    copy_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, "copy.txt", s3_client=s3_client)
    delete_s3_object(TEST_BUCKET_NAME, TEST_FILE_PATH, s3_client=s3_client)

    assert fetch_s3_object(TEST_BUCKET_NAME, "copy.txt", s3_client=s3_client) == TEST_FILE_CONTENT
    assert not object_exists_in_s3(TEST_BUCKET_NAME, TEST_FILE_PATH, s3_client=s3_client)


def test_fetch_s3_objects_page_paginates(s3_client):
    for index in range(5):
        upload_s3_object(TEST_BUCKET_NAME, f"items/{index}.txt", b"x", s3_client=s3_client)
    upload_s3_object(TEST_BUCKET_NAME, "other.txt", b"x", s3_client=s3_client)

    first_page = fetch_s3_objects_page(TEST_BUCKET_NAME, prefix="items/", max_keys=3, s3_client=s3_client)
    second_page = fetch_s3_objects_page(
        TEST_BUCKET_NAME,
        prefix="items/",
        continuation_token=first_page["NextContinuationToken"],
        max_keys=3,
        s3_client=s3_client,
    )

    keys = [item["Key"] for item in first_page["Contents"] + second_page["Contents"]]
    assert sorted(keys) == [f"items/{index}.txt" for index in range(5)]
    assert "NextContinuationToken" not in second_page


def test_fetch_s3_objects_page_with_delimiter(s3_client):
    upload_s3_object(TEST_BUCKET_NAME, "a/b/c.txt", b"x", s3_client=s3_client)

    page = fetch_s3_objects_page(TEST_BUCKET_NAME, prefix="a/", delimiter="/", s3_client=s3_client)

    assert page["CommonPrefixes"] == [{"Prefix": "a/b/"}]
