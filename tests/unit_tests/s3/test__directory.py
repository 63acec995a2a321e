from s3_providers.s3.directory import child_keys_in_page, directory_exists, iter_child_keys
from tests.consts import TEST_BUCKET_NAME


class PagedS3Client:
    """Stand-in client that serves ``list_objects_v2`` from fixed pages."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def list_objects_v2(self, **kwargs):
        self.calls.append(kwargs)
        index = int(kwargs.get("ContinuationToken", "0"))
        page = dict(self.pages[index])
        if index + 1 < len(self.pages):
            page["NextContinuationToken"] = str(index + 1)
        return page


def _page(*keys):
    return {"Contents": [{"Key": key} for key in keys], "KeyCount": len(keys)}


def test_child_keys_in_page_skips_own_marker_and_nested_keys():
    page = _page("notes/", "notes/a.txt", "notes/sub/", "notes/sub/b.txt")

    assert list(child_keys_in_page(page, "notes/", recursive=False)) == ["notes/a.txt"]
    assert list(child_keys_in_page(page, "notes/", recursive=True)) == [
        "notes/a.txt",
        "notes/sub/",
        "notes/sub/b.txt",
    ]


def test_child_keys_in_page_applies_ignore_filter():
    page = _page("notes/a.txt", "notes/debug.log")

    keys = child_keys_in_page(page, "notes/", ignore_filter=lambda key: key.endswith(".log"))

    assert list(keys) == ["notes/a.txt"]


def test_child_keys_in_page_handles_empty_listing():
    assert list(child_keys_in_page({"KeyCount": 0}, "")) == []


async def test_iter_child_keys_follows_continuation_tokens():
    client = PagedS3Client([
        _page("logs/1.txt", "logs/2.txt"),
        _page("logs/3.txt"),
        _page("logs/old/4.txt"),
    ])

    keys = [key async for key in iter_child_keys(client, TEST_BUCKET_NAME, "logs")]

    assert keys == ["logs/1.txt", "logs/2.txt", "logs/3.txt", "logs/old/4.txt"]
    assert [call.get("ContinuationToken") for call in client.calls] == [None, "1", "2"]
    assert all(call["Prefix"] == "logs/" for call in client.calls)


async def test_iter_child_keys_restarts_from_first_page():
    client = PagedS3Client([_page("a"), _page("b")])

    first = [key async for key in iter_child_keys(client, TEST_BUCKET_NAME, "")]
    second = [key async for key in iter_child_keys(client, TEST_BUCKET_NAME, "")]

    assert first == second == ["a", "b"]
    assert client.calls[0]["Prefix"] == ""
    assert "ContinuationToken" not in client.calls[2]


def test_directory_exists(s3_client):
    s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key="notes/a.txt", Body=b"hi")
    s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key="empty/", Body=b"")

    assert directory_exists(s3_client, TEST_BUCKET_NAME, "notes")
    assert directory_exists(s3_client, TEST_BUCKET_NAME, "empty")
    assert directory_exists(s3_client, TEST_BUCKET_NAME, "")
    assert not directory_exists(s3_client, TEST_BUCKET_NAME, "notes/a.txt")
    assert not directory_exists(s3_client, TEST_BUCKET_NAME, "missing")
    # "note" is a string prefix of "notes/" but not a directory
    assert not directory_exists(s3_client, TEST_BUCKET_NAME, "note")
