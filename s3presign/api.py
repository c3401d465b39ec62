"""Entry points for host environments.

Each function takes a configuration record, opens one storage session,
issues a single operation, and closes the session before returning.
"""

import logging
from collections.abc import Callable
from typing import Any

import click

from s3presign.core.config import parse_client_config
from s3presign.core.exceptions import S3SessionError
from s3presign.core.session import ClientFactory, HeadResult, StorageSession
from s3presign.storage.uploads import UploadRequest, UploadRequestBuilder

logger = logging.getLogger(__name__)


def open_session(
    config: Any, client_factory: ClientFactory | None = None
) -> StorageSession:
    """Resolve a configuration record and open a storage session for it.

    Raises:
        S3ConfigurationError: If the record is invalid
        S3SessionError: If the session cannot be established
    """
    client_config = parse_client_config(config)
    try:
        return StorageSession(client_config, client_factory=client_factory)
    except S3SessionError as e:
        logger.error(f"Could not establish a storage session: {e}")
        raise S3SessionError(
            "Could not establish a storage session",
            original_error=e.original_error,
            endpoint=e.endpoint,
            hint=e.hint,
        ) from e


def create_upload_request(
    filename: str,
    file_size: int,
    config: Any,
    client_factory: ClientFactory | None = None,
) -> UploadRequest:
    """Issue a read URL and a presigned write URL for a new upload.

    A presign failure does not raise; it leaves ``write_url`` as None.

    Args:
        filename: Name of the file being uploaded
        file_size: Size in bytes the upload will declare
        config: Configuration record
        client_factory: Optional S3 client factory

    Returns:
        The upload request
    """
    with open_session(config, client_factory) as session:
        return UploadRequestBuilder(session).create_upload_request(filename, file_size)


def check_exists(
    filename: str,
    config: Any,
    client_factory: ClientFactory | None = None,
) -> HeadResult | None:
    """Look up an object's size and content type.

    Returns None both for a missing object and for a failed query.
    """
    with open_session(config, client_factory) as session:
        return session.head_object(filename)


def list_files(
    config: Any,
    client_factory: ClientFactory | None = None,
    echo: Callable[[str], Any] = click.echo,
) -> None:
    """Write every key under the configured upload path to ``echo``.

    Raises:
        S3OperationError: If listing fails
    """
    with open_session(config, client_factory) as session:
        for key in session.list_objects():
            echo(key)
