"""Pytest fixtures for s3presign testing.

To use these fixtures, add to your conftest.py:

    pytest_plugins = ["s3presign.testing.fixtures"]
"""

import pytest

from s3presign.testing.mocks import InMemoryS3
from s3presign.testing.utils import create_test_config, factory_for


@pytest.fixture
def s3_test_bucket() -> str:
    """Provide test bucket name."""
    return "test-bucket"


@pytest.fixture
def client_config(s3_test_bucket: str) -> dict:
    """Provide a configuration record for the test bucket.

    Returns:
        Configuration record with a base domain of ``cdn.example.com``
    """
    return create_test_config(bucket=s3_test_bucket)


@pytest.fixture
def mock_s3(s3_test_bucket: str) -> InMemoryS3:
    """Provide in-memory S3 mock with the test bucket created.

    Returns:
        InMemoryS3 instance
    """
    s3 = InMemoryS3()
    s3._ensure_bucket(s3_test_bucket)
    yield s3
    s3.clear()


@pytest.fixture
def mock_factory(mock_s3: InMemoryS3):
    """Provide a client factory handing out ``mock_s3``."""
    return factory_for(mock_s3)
