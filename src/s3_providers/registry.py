"""Registration hook that builds named providers from a plugin host config map."""

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError

from s3_providers.errors import ConfigurationError
from s3_providers.providers.base import CDNProvider, FileSystemProvider
from s3_providers.providers.cdn import S3CDNProvider
from s3_providers.providers.filesystem import S3FileSystemProvider
from s3_providers.schemas import ProvidersConfig, S3CDNProviderOptions, S3FileSystemProviderOptions

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Named filesystem and CDN providers available to the host."""

    def __init__(self):
        self._filesystems: Dict[str, FileSystemProvider] = {}
        self._cdns: Dict[str, CDNProvider] = {}

    def register_filesystem(self, name: str, provider: FileSystemProvider) -> None:
        if name in self._filesystems:
            raise ConfigurationError(f"Filesystem provider already registered: {name}", {"name": name})
        self._filesystems[name] = provider
        logger.info(f"Registered filesystem provider: {name}")

    def register_cdn(self, name: str, provider: CDNProvider) -> None:
        if name in self._cdns:
            raise ConfigurationError(f"CDN provider already registered: {name}", {"name": name})
        self._cdns[name] = provider
        logger.info(f"Registered CDN provider: {name}")

    def get_filesystem(self, name: str) -> FileSystemProvider:
        try:
            return self._filesystems[name]
        except KeyError:
            raise ConfigurationError(f"Unknown filesystem provider: {name}", {"name": name}) from None

    def get_cdn(self, name: str) -> CDNProvider:
        try:
            return self._cdns[name]
        except KeyError:
            raise ConfigurationError(f"Unknown CDN provider: {name}", {"name": name}) from None

    @property
    def filesystem_names(self):
        return list(self._filesystems)

    @property
    def cdn_names(self):
        return list(self._cdns)


def _validation_message(err: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}" for error in err.errors()
    )
    return f"Invalid provider config: {problems}"


def validate_providers_config(config: Any) -> ProvidersConfig:
    """Validate the whole host config map, raising ``ConfigurationError`` on any problem."""
    try:
        return ProvidersConfig.model_validate(config)
    except ValidationError as err:
        raise ConfigurationError(_validation_message(err)) from err


def build_filesystem_provider(options: S3FileSystemProviderOptions) -> S3FileSystemProvider:
    return S3FileSystemProvider(options.bucket_name, options.client_config)


def build_cdn_provider(options: S3CDNProviderOptions) -> S3CDNProvider:
    return S3CDNProvider(**options.model_dump())


def register_providers(
    config: Mapping[str, Mapping[str, Mapping[str, Any]]],
    registry: Optional[ProviderRegistry] = None,
) -> ProviderRegistry:
    """
    Build and register every provider named in ``config``.

    Nothing is registered unless every entry is valid, so a failed call
    leaves ``registry`` as it was.

    Args:
        config: ``{"filesystem": {name: options}, "cdn": {name: options}}``.
            Either section may be omitted.
        registry: Registry to add to; a new one is created when omitted

    Returns:
        The registry holding the new providers

    Raises:
        ConfigurationError: On unknown sections, invalid options or duplicate names
    """
    registry = registry or ProviderRegistry()
    validated = validate_providers_config(config)

    taken_filesystems = sorted(set(validated.filesystem) & set(registry.filesystem_names))
    taken_cdns = sorted(set(validated.cdn) & set(registry.cdn_names))
    if taken_filesystems or taken_cdns:
        raise ConfigurationError(
            f"Providers already registered: {taken_filesystems + taken_cdns}",
            {"filesystem": ", ".join(taken_filesystems), "cdn": ", ".join(taken_cdns)},
        )

    filesystems = {name: build_filesystem_provider(options) for name, options in validated.filesystem.items()}
    cdns = {name: build_cdn_provider(options) for name, options in validated.cdn.items()}

    for name, provider in filesystems.items():
        registry.register_filesystem(name, provider)
    for name, provider in cdns.items():
        registry.register_cdn(name, provider)
    return registry
