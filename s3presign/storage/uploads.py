"""Presigned upload request issuance for s3presign."""

import logging
import uuid
from dataclasses import dataclass
from urllib.parse import quote, urlunsplit

from s3presign.core.exceptions import S3presignError, S3ValidationError
from s3presign.core.session import StorageSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadRequest:
    """A read URL and a presigned write URL for one object key.

    ``write_url`` is None when signing failed. This is an expected outcome,
    not an error: callers must check :attr:`is_writable` before uploading.
    Unpacks as ``read_url, write_url``.

    Attributes:
        read_url: Public URL the object will be readable at
        write_url: Presigned PUT URL, or None
        object_key: Full storage key both URLs refer to
    """

    read_url: str | None
    write_url: str | None
    object_key: str

    @property
    def is_writable(self) -> bool:
        return self.write_url is not None

    def __iter__(self):
        return iter((self.read_url, self.write_url))


class UploadRequestBuilder:
    """Builds upload requests with collision-resistant object keys.

    Every request gets a fresh UUID4 path segment, so concurrent uploads of
    the same filename land on different keys without any coordination.

    Example:
        with StorageSession(config) as session:
            request = UploadRequestBuilder(session).create_upload_request(
                "photo.jpg", 2048
            )
            if request.is_writable:
                ...  # hand request.write_url to the client
    """

    def __init__(self, session: StorageSession):
        """Initialize the builder.

        Args:
            session: An open storage session
        """
        self.session = session
        self.base_domain = session.config.base_domain
        self.upload_path = session.upload_path

    @staticmethod
    def generate_random_segment() -> str:
        """Return a canonical lowercase hyphenated UUID4."""
        return str(uuid.uuid4())

    def build_read_url(self, random_segment: str, filename: str) -> str:
        """Compose the public read URL for an object.

        Without a base domain the URL is path-only; the caller is expected
        to prefix a host.

        Args:
            random_segment: The per-upload random path segment
            filename: The uploaded file's name

        Returns:
            ``https://{base_domain}/{upload_path}/{segment}/{filename}``, or
            just the path when no base domain is configured
        """
        path = quote(f"/{self.upload_path}/{random_segment}/{filename}")
        if self.base_domain:
            return urlunsplit(("https", self.base_domain, path, "", ""))
        return path

    def create_upload_request(self, filename: str, file_size: int) -> UploadRequest:
        """Create a read URL and a presigned write URL for a new upload.

        Presign failures are logged and reported as ``write_url=None``; they
        are never raised. No retry is attempted.

        Args:
            filename: Name of the file being uploaded
            file_size: Exact size in bytes the upload will declare

        Returns:
            UploadRequest whose URLs both refer to the same object key

        Raises:
            S3ValidationError: If filename is empty or file_size is not a
                non-negative integer
        """
        if not filename or not filename.strip("/"):
            raise S3ValidationError("Filename must not be empty", field="filename")
        if (
            not isinstance(file_size, int)
            or isinstance(file_size, bool)
            or file_size < 0
        ):
            raise S3ValidationError(
                f"File size must be a non-negative integer, got {file_size!r}",
                field="file_size",
                value=str(file_size),
            )

        random_segment = self.generate_random_segment()
        path = f"{random_segment}/{filename}"
        read_url = self.build_read_url(random_segment, filename)

        try:
            write_url = self.session.presign_put(path, file_size)
        except S3presignError as e:
            logger.warning(f"Presigning upload for {path} failed: {e}")
            write_url = None

        return UploadRequest(
            read_url=read_url,
            write_url=write_url,
            object_key=self.session.object_key(path),
        )
