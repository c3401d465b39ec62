"""Custom exceptions for s3presign.

This module provides a hierarchy of exceptions with helpful error messages
to make debugging easier for callers of the upload entry points.
"""


class S3presignError(Exception):
    """Base exception for all s3presign errors.

    All s3presign exceptions inherit from this class, making it easy
    to catch all package-specific errors.
    """

    def __init__(self, message: str, hint: str | None = None):
        """Initialize the exception.

        Args:
            message: The error message
            hint: Optional hint for resolving the error
        """
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class S3ConfigurationError(S3presignError):
    """Raised when a client configuration record is invalid.

    Raised by the configuration resolver before any network attempt.
    """

    def __init__(
        self,
        message: str | None = None,
        missing_fields: list[str] | None = None,
        field: str | None = None,
        expected: str | None = None,
    ):
        """Initialize the configuration error.

        Args:
            message: Custom error message
            missing_fields: List of missing required fields
            field: The field holding a value of the wrong type
            expected: The type expected for ``field``
        """
        self.missing_fields = missing_fields or []
        self.field = field
        self.expected = expected

        if missing_fields:
            fields_str = ", ".join(missing_fields)
            message = f"Missing required configuration: {fields_str}"
            hint = "bucket, region, upload_path, access_id and access_key are required."
        elif field:
            message = message or f"Invalid value for '{field}'"
            hint = f"'{field}' must be of type {expected or 'str'}."
        else:
            hint = "Check the configuration record passed to s3presign."

        super().__init__(message or "Invalid s3presign configuration", hint)


class S3ValidationError(S3presignError):
    """Raised when an argument to an entry point fails validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
    ):
        """Initialize the validation error.

        Args:
            message: The error message
            field: The argument that failed validation
            value: The invalid value (don't include sensitive data!)
        """
        self.field = field
        self.value = value

        hint = None
        if field:
            hint = f"Check the value for '{field}'."

        super().__init__(message, hint)


class S3SessionError(S3presignError):
    """Raised when a storage session cannot be established.

    This exception wraps credential, region and endpoint resolution
    failures with helpful context about what might be wrong.
    """

    def __init__(
        self,
        message: str | None = None,
        original_error: Exception | None = None,
        endpoint: str | None = None,
        hint: str | None = None,
    ):
        """Initialize the session error.

        Args:
            message: Custom error message (optional)
            original_error: The original exception that caused this error
            endpoint: The S3 endpoint URL being connected to
            hint: Hint to use when none can be derived from the error
        """
        self.original_error = original_error
        self.endpoint = endpoint

        if message:
            final_message = message
            if original_error:
                _, derived = self._format_error(original_error, endpoint)
                hint = derived or hint
        elif original_error:
            final_message, hint = self._format_error(original_error, endpoint)
        else:
            final_message = "Could not establish a storage session"
            hint = "Check the credentials, region and endpoint configuration."

        super().__init__(final_message, hint)

    def _format_error(
        self, error: Exception, endpoint: str | None
    ) -> tuple[str, str | None]:
        """Format the error message based on the underlying error."""
        error_str = str(error)

        if "region_name" in error_str:
            return (
                "Invalid region name",
                "Use a region identifier such as 'us-east-1'.",
            )

        if "Could not connect" in error_str or "Connection refused" in error_str:
            return (
                f"Could not connect to S3 at {endpoint or 'AWS'}",
                "Check your network connection and endpoint_url configuration.",
            )

        if "Invalid endpoint" in error_str:
            return (
                f"Invalid endpoint URL: {endpoint}",
                "endpoint_url must be an absolute http(s) URL.",
            )

        if "InvalidAccessKeyId" in error_str:
            return (
                "Invalid access key ID",
                "Check the access_id configuration value.",
            )

        return (f"Could not establish a storage session: {error}", None)


class S3OperationError(S3presignError):
    """Raised when an S3 operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        key: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the operation error.

        Args:
            message: The error message
            operation: The S3 operation that failed (e.g., 'put_object')
            key: The S3 key involved in the operation
            original_error: The original exception
        """
        self.operation = operation
        self.key = key
        self.original_error = original_error

        hint = None
        if "NoSuchBucket" in message:
            hint = "The specified bucket does not exist."
        elif "AccessDenied" in message:
            hint = "Check your IAM permissions for this operation."

        super().__init__(message, hint)
