"""Storage sessions bridging synchronous callers onto the async S3 client."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from dataclasses import dataclass
from typing import Any, TypeVar

from aiobotocore.session import get_session
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from s3presign.core.config import ClientConfig
from s3presign.core.exceptions import S3OperationError, S3SessionError

logger = logging.getLogger(__name__)

# Lifetime of a presigned write URL, in seconds.
PRESIGN_EXPIRES_IN = 300

T = TypeVar("T")

ClientFactory = Callable[[ClientConfig], AbstractAsyncContextManager]


@dataclass(frozen=True)
class HeadResult:
    """Metadata returned by a head query.

    Attributes:
        length: Object size in bytes
        content_type: Declared content type, if any
    """

    length: int
    content_type: str | None = None


def adjust_endpoint_url(
    endpoint_url: str | None, bucket_name: str | None
) -> str | None:
    """Adjust endpoint URL for path-style addressing if needed.

    Args:
        endpoint_url: The S3 endpoint URL
        bucket_name: The S3 bucket name

    Returns:
        Adjusted endpoint URL or None
    """
    if not endpoint_url:
        return None
    if bucket_name and f"{bucket_name}." in endpoint_url:
        return endpoint_url.replace(f"{bucket_name}.", "")
    return endpoint_url


def create_s3_client(config: ClientConfig) -> AbstractAsyncContextManager:
    """Create an aiobotocore S3 client context for a configuration.

    Without an endpoint override botocore resolves the standard regional
    endpoint. Retries are disabled; each request is attempted once.

    Args:
        config: The client configuration

    Returns:
        An async context manager yielding the S3 client
    """
    client_config = Config(
        signature_version="s3v4",
        s3={"addressing_style": "path"},
        retries={"total_max_attempts": 1, "mode": "standard"},
    )
    return get_session().create_client(
        "s3",
        region_name=config.region,
        aws_access_key_id=config.access_id,
        aws_secret_access_key=config.access_key,
        endpoint_url=adjust_endpoint_url(config.endpoint_url, config.bucket),
        config=client_config,
    )


class StorageSession:
    """A configured connection to the object store for the span of one call.

    The session owns a private event loop and runs every S3 request to
    completion on it, so callers that cannot await still get plain return
    values. Sessions are bound to the configuration they were built from and
    must not be shared between threads.

    Example:
        with StorageSession(config) as session:
            url = session.presign_put("3f1c.../photo.jpg", 2048)
            meta = session.head_object("3f1c.../photo.jpg")
    """

    def __init__(
        self,
        config: ClientConfig,
        client_factory: ClientFactory | None = None,
    ):
        """Open the session.

        Args:
            config: The resolved client configuration
            client_factory: Callable returning an async context manager that
                yields an S3 client; defaults to :func:`create_s3_client`

        Raises:
            S3SessionError: If the client cannot be created, e.g. for a
                malformed region or endpoint
        """
        self.config = config
        self.bucket = config.bucket
        self.upload_path = config.upload_path
        self._endpoint_url = adjust_endpoint_url(config.endpoint_url, config.bucket)
        self._client_factory = client_factory or create_s3_client

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise S3SessionError(
                "Cannot open a storage session inside a running event loop",
                endpoint=self._endpoint_url,
                hint="From async code, use an aiobotocore client directly.",
            )

        self._loop = asyncio.new_event_loop()
        self._exit_stack = AsyncExitStack()
        self._closed = False

        try:
            self._client = self._loop.run_until_complete(self._open())
        except Exception as e:
            self._closed = True
            try:
                self._loop.run_until_complete(self._exit_stack.aclose())
            finally:
                self._loop.close()
            raise S3SessionError(
                original_error=e,
                endpoint=self._endpoint_url,
            ) from e

        logger.debug(
            f"Opened storage session for bucket {self.bucket} "
            f"(endpoint {self._endpoint_url or 'regional'})"
        )

    async def _open(self) -> Any:
        return await self._exit_stack.enter_async_context(
            self._client_factory(self.config)
        )

    def _run(self, coro: Coroutine[Any, Any, T]) -> T:
        if self._closed:
            coro.close()
            raise S3SessionError("Storage session is closed")
        return self._loop.run_until_complete(coro)

    def object_key(self, path: str) -> str:
        """Return the storage key for a path relative to the upload path."""
        return f"{self.upload_path}/{path.lstrip('/')}"

    def list_objects(self) -> list[str]:
        """List every key under the upload path.

        Returns:
            All matching keys, in the order the store returns them

        Raises:
            S3OperationError: If any listing request fails
        """
        return self._run(self._list_objects())

    async def _list_objects(self) -> list[str]:
        params = {"Bucket": self.bucket, "Prefix": f"{self.upload_path}/"}
        keys: list[str] = []
        try:
            while True:
                response = await self._client.list_objects_v2(**params)
                keys.extend(obj["Key"] for obj in response.get("Contents", []))
                if not response.get("IsTruncated"):
                    return keys
                params["ContinuationToken"] = response["NextContinuationToken"]
        except (ClientError, BotoCoreError) as e:
            raise S3OperationError(
                f"Failed to list objects: {e}",
                operation="list_objects_v2",
                key=params["Prefix"],
                original_error=e,
            ) from e

    def presign_put(self, path: str, content_length: int) -> str:
        """Create a presigned PUT URL for a path under the upload path.

        The URL is valid for ``PRESIGN_EXPIRES_IN`` seconds and is scoped to
        the bucket, the key and the declared content length.

        Args:
            path: Key relative to the upload path
            content_length: Size in bytes the upload must declare

        Returns:
            The presigned URL

        Raises:
            S3OperationError: If the URL cannot be signed
        """
        return self._run(self._presign_put(self.object_key(path), content_length))

    async def _presign_put(self, key: str, content_length: int) -> str:
        try:
            return await self._client.generate_presigned_url(
                ClientMethod="put_object",
                Params={
                    "Bucket": self.bucket,
                    "Key": key,
                    "ContentLength": content_length,
                },
                ExpiresIn=PRESIGN_EXPIRES_IN,
                HttpMethod="PUT",
            )
        except (ClientError, BotoCoreError) as e:
            raise S3OperationError(
                f"Could not generate put request: {e}",
                operation="put_object",
                key=key,
                original_error=e,
            ) from e

    def head_object(self, path: str) -> HeadResult | None:
        """Fetch size and content type for a path under the upload path.

        A missing object and a failed query both return None.

        Args:
            path: Key relative to the upload path

        Returns:
            HeadResult, or None
        """
        return self._run(self._head_object(self.object_key(path)))

    async def _head_object(self, key: str) -> HeadResult | None:
        try:
            response = await self._client.head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            logger.debug(f"head_object on {key} returned {code}")
            return None
        except BotoCoreError as e:
            logger.debug(f"head_object on {key} failed: {e}")
            return None

        return HeadResult(
            length=response.get("ContentLength", 0),
            content_type=response.get("ContentType"),
        )

    def close(self) -> None:
        """Close the S3 client and the session's event loop."""
        if self._closed:
            return
        self._closed = True
        try:
            self._loop.run_until_complete(self._exit_stack.aclose())
            self._loop.run_until_complete(self._loop.shutdown_asyncgens())
        finally:
            self._loop.close()
        logger.debug(f"Closed storage session for bucket {self.bucket}")

    def __enter__(self) -> "StorageSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
