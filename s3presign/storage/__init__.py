"""Storage utilities for s3presign.

This module provides upload request issuance, pairing a public read URL
with a presigned write URL for direct client uploads.
"""

from s3presign.storage.uploads import UploadRequest, UploadRequestBuilder

__all__ = ["UploadRequest", "UploadRequestBuilder"]
