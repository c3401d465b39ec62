"""Testing utilities for s3presign.

This module provides an in-memory S3 double, configuration helpers and
pytest fixtures for testing code built on s3presign.

Usage in conftest.py:
    from s3presign.testing import mock_s3_client, create_test_config, factory_for

    @pytest.fixture
    def s3():
        with mock_s3_client() as client:
            yield client

Or use provided fixtures directly:
    pytest_plugins = ["s3presign.testing.fixtures"]
"""

from s3presign.testing.mocks import InMemoryS3, mock_s3_client
from s3presign.testing.utils import create_test_config, factory_for

__all__ = [
    "InMemoryS3",
    "mock_s3_client",
    "create_test_config",
    "factory_for",
]
