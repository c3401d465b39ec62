"""Testing utilities for s3presign."""

from s3presign.core.config import ClientConfig
from s3presign.testing.mocks import InMemoryS3


def create_test_config(
    bucket: str = "test-bucket",
    upload_path: str = "uploads",
    base_domain: str | None = "cdn.example.com",
    **overrides
) -> dict:
    """Create a configuration record for testing.

    Args:
        bucket: The S3 bucket name for tests
        upload_path: The upload path prefix for tests
        base_domain: Public domain for read URLs, or None
        **overrides: Additional fields to override

    Returns:
        A configuration record accepted by the entry points
    """
    record = {
        "bucket": bucket,
        "region": "us-east-1",
        "upload_path": upload_path,
        "access_id": "testing",
        "access_key": "testing",
        "endpoint_url": None,
        "base_domain": base_domain,
    }
    record.update(overrides)
    return record


def factory_for(s3: InMemoryS3):
    """Return a client factory that always hands out ``s3``.

    Example:
        >>> s3 = InMemoryS3()
        >>> check_exists("a.txt", config, client_factory=factory_for(s3))
    """

    def _factory(config: ClientConfig) -> InMemoryS3:
        return s3

    return _factory
