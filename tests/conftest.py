"""Shared fixtures for s3presign tests."""

from s3presign.testing.fixtures import (  # noqa: F401
    client_config,
    mock_factory,
    mock_s3,
    s3_test_bucket,
)
