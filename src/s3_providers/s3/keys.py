"""Path to S3 key normalization."""

from s3_providers.errors import PathTraversalError

S3_SCHEME = "s3://"


def normalize_key(raw_path: str) -> str:
    """
    Convert a filesystem-style path into an S3 key relative to the bucket root.

    Backslashes become forward slashes, leading/trailing slashes are dropped
    and ``.``/empty segments are removed. A ``..`` segment removes the
    previous segment.

    :param raw_path: user supplied path, e.g. ``"/notes/./a.txt"``.
    :return: the canonical key, ``""`` for the bucket root.
    :raises PathTraversalError: if ``..`` climbs above the bucket root.
    """
    normalized_path = raw_path.replace("\\", "/").strip("/")
    result_parts = []
    for part in normalized_path.split("/"):
        if part == "..":
            if not result_parts:
                raise PathTraversalError(
                    f"Invalid path: {raw_path} attempts to traverse above bucket root.",
                    {"path": raw_path},
                )
            result_parts.pop()
        elif part not in (".", ""):
            result_parts.append(part)
    return "/".join(result_parts)


def directory_prefix(key: str) -> str:
    """Return the listing prefix for a directory key (``""`` for the root)."""
    if key == "":
        return ""
    return key if key.endswith("/") else key + "/"


def to_absolute_path(bucket_name: str, path: str) -> str:
    """Return ``s3://bucket/key`` for a relative path; absolute paths pass through."""
    if path.startswith(S3_SCHEME):
        return path
    return f"{S3_SCHEME}{bucket_name}/{normalize_key(path)}"


def to_relative_path(bucket_name: str, path: str) -> str:
    """Return the bucket-relative key for a relative or ``s3://bucket/`` path."""
    bucket_root = f"{S3_SCHEME}{bucket_name}/"
    if path.startswith(bucket_root):
        path = path[len(bucket_root):]
    return normalize_key(path)
