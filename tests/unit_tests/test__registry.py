import pytest

from s3_providers.errors import ConfigurationError
from s3_providers.providers.cdn import S3CDNProvider
from s3_providers.providers.filesystem import S3FileSystemProvider
from s3_providers.registry import ProviderRegistry, register_providers
from tests.consts import (
    TEST_ACCESS_KEY_ID,
    TEST_BUCKET_NAME,
    TEST_CDN_BASE_URL,
    TEST_REGION,
    TEST_SECRET_ACCESS_KEY,
)

PROVIDER_CONFIG = {
    "filesystem": {
        "s3": {"bucket_name": TEST_BUCKET_NAME, "client_config": {"region_name": TEST_REGION}},
    },
    "cdn": {
        "assets": {
            "bucket": TEST_BUCKET_NAME,
            "region": TEST_REGION,
            "access_key_id": TEST_ACCESS_KEY_ID,
            "secret_access_key": TEST_SECRET_ACCESS_KEY,
            "base_url": TEST_CDN_BASE_URL + "/",
        },
    },
}


def test_register_providers(mocked_aws):
    registry = register_providers(PROVIDER_CONFIG)

    assert registry.filesystem_names == ["s3"]
    assert registry.cdn_names == ["assets"]
    assert isinstance(registry.get_filesystem("s3"), S3FileSystemProvider)
    cdn = registry.get_cdn("assets")
    assert isinstance(cdn, S3CDNProvider)
    assert cdn.base_url == TEST_CDN_BASE_URL


async def test_registered_filesystem_is_usable(mocked_aws):
    registry = register_providers({"filesystem": PROVIDER_CONFIG["filesystem"]})
    filesystem = registry.get_filesystem("s3")

    await filesystem.write_file("hello.txt", "hi")

    assert await filesystem.read_file("hello.txt") == "hi"


def test_missing_required_option_is_named(aws_credentials):
    config = {"cdn": {"assets": {"bucket": TEST_BUCKET_NAME, "region": TEST_REGION}}}

    with pytest.raises(ConfigurationError) as exc_info:
        register_providers(config)

    assert "assets" in exc_info.value.message
    assert "access_key_id" in exc_info.value.message
    assert "secret_access_key" in exc_info.value.message


def test_unknown_option_is_rejected(aws_credentials):
    config = {"filesystem": {"s3": {"bucket_name": TEST_BUCKET_NAME, "bucket_region": "eu-west-1"}}}

    with pytest.raises(ConfigurationError) as exc_info:
        register_providers(config)

    assert "bucket_region" in exc_info.value.message


def test_unknown_section_is_rejected():
    with pytest.raises(ConfigurationError):
        register_providers({"queues": {}})


def test_duplicate_and_unknown_names(mocked_aws):
    registry = ProviderRegistry()
    register_providers({"filesystem": PROVIDER_CONFIG["filesystem"]}, registry)

    with pytest.raises(ConfigurationError):
        register_providers({"filesystem": PROVIDER_CONFIG["filesystem"]}, registry)
    with pytest.raises(ConfigurationError):
        registry.get_filesystem("missing")
    with pytest.raises(ConfigurationError):
        registry.get_cdn("missing")


@pytest.mark.parametrize(
    "config",
    [
        None,
        "filesystem",
        {"filesystem": None},
        {"cdn": ["assets"]},
        {"filesystem": {"s3": None}},
        {"filesystem": {"s3": TEST_BUCKET_NAME}},
        {"cdn": {"assets": 42}},
    ],
)
def test_malformed_config_raises_configuration_error(aws_credentials, config):
    with pytest.raises(ConfigurationError) as exc_info:
        register_providers(config)

    assert exc_info.value.message.startswith("Invalid provider config:")


def test_failed_registration_leaves_registry_unchanged(mocked_aws):
    registry = ProviderRegistry()
    config = {
        "filesystem": PROVIDER_CONFIG["filesystem"],
        "cdn": {"bad": {"bucket": TEST_BUCKET_NAME}},
    }

    with pytest.raises(ConfigurationError):
        register_providers(config, registry)

    assert registry.filesystem_names == []
    assert registry.cdn_names == []


def test_duplicate_name_leaves_registry_unchanged(mocked_aws):
    registry = ProviderRegistry()
    register_providers({"cdn": PROVIDER_CONFIG["cdn"]}, registry)

    with pytest.raises(ConfigurationError):
        register_providers(PROVIDER_CONFIG, registry)

    assert registry.filesystem_names == []
    assert registry.cdn_names == ["assets"]
