"""s3presign: presigned upload links and object metadata for S3 buckets."""

__version__ = "0.1.0"

# Core components
from s3presign.core.config import ClientConfig, parse_client_config
from s3presign.core.exceptions import (
    S3presignError,
    S3ConfigurationError,
    S3ValidationError,
    S3SessionError,
    S3OperationError,
)
from s3presign.core.session import (
    PRESIGN_EXPIRES_IN,
    HeadResult,
    StorageSession,
    create_s3_client,
)
from s3presign.core.settings import S3presignSettings

# Storage components
from s3presign.storage import UploadRequest, UploadRequestBuilder

# Entry points
from s3presign.api import check_exists, create_upload_request, list_files

__all__ = [
    # Version
    "__version__",
    # Core
    "ClientConfig",
    "parse_client_config",
    "S3presignSettings",
    "StorageSession",
    "HeadResult",
    "PRESIGN_EXPIRES_IN",
    "create_s3_client",
    "S3presignError",
    "S3ConfigurationError",
    "S3ValidationError",
    "S3SessionError",
    "S3OperationError",
    # Storage
    "UploadRequest",
    "UploadRequestBuilder",
    # Entry points
    "create_upload_request",
    "check_exists",
    "list_files",
]
