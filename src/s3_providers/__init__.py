"""
AWS S3 providers for the plugin host.

Contains an S3 virtual filesystem provider and an S3 CDN provider, plus the
registration hook that builds them from a host configuration map.
"""

from s3_providers.providers import S3CDNProvider, S3FileSystemProvider
from s3_providers.registry import ProviderRegistry, register_providers

name = "s3-providers"
version = "0.1.0"
description = "AWS S3 filesystem and CDN providers for the plugin host"

__all__ = [
    "ProviderRegistry",
    "S3CDNProvider",
    "S3FileSystemProvider",
    "register_providers",
]
