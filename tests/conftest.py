from tests.fixtures.s3_fixtures import (  # noqa: F401
    aws_credentials,
    cdn,
    default_url_cdn,
    filesystem,
    mocked_aws,
    s3_client,
)
