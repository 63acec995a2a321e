"""
Provider implementations for the plugin host.

Contains the abstract filesystem/CDN interfaces and their S3 implementations.
"""

from s3_providers.providers.base import CDNProvider, FileSystemProvider
from s3_providers.providers.cdn import S3CDNProvider
from s3_providers.providers.filesystem import S3FileSystemProvider

__all__ = ["CDNProvider", "FileSystemProvider", "S3CDNProvider", "S3FileSystemProvider"]
