"""Client configuration resolution.

A configuration record arrives from the host as a plain mapping. It is parsed
into an immutable :class:`ClientConfig` with a closed set of recognized
fields; nothing here touches the network.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from s3presign.core.exceptions import S3ConfigurationError

REQUIRED_FIELDS = ("bucket", "region", "upload_path", "access_id", "access_key")
OPTIONAL_FIELDS = ("endpoint_url", "base_domain")


class ClientConfig(BaseModel):
    """Per-call connection parameters for one storage session.

    Attributes:
        endpoint_url: Custom S3 endpoint (MinIO, LocalStack, R2...), or None
            for the standard regional endpoint
        bucket: Bucket name
        base_domain: Public domain used to build read URLs, or None
        upload_path: Key prefix all uploads are placed under
        region: Region identifier, e.g. ``us-east-1``
        access_id: Access key ID
        access_key: Secret access key
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    endpoint_url: str | None = None
    bucket: str = Field(min_length=1)
    base_domain: str | None = None
    upload_path: str = Field(min_length=1)
    region: str = Field(min_length=1)
    access_id: str = Field(min_length=1)
    access_key: str = Field(min_length=1, repr=False)

    @field_validator("endpoint_url", "base_domain", mode="before")
    @classmethod
    def _empty_as_none(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("upload_path")
    @classmethod
    def _normalize_upload_path(cls, value: str) -> str:
        value = value.strip("/")
        if not value:
            raise ValueError("upload_path must contain at least one path segment")
        return value

    @field_validator("base_domain")
    @classmethod
    def _normalize_base_domain(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.rstrip("/") or None


def _expected_type(field: str) -> str:
    if field in OPTIONAL_FIELDS:
        return "str | None"
    return "str"


def parse_client_config(record: Any) -> ClientConfig:
    """Parse a host configuration record into a :class:`ClientConfig`.

    Args:
        record: A mapping with the recognized configuration keys, or an
            existing ClientConfig

    Returns:
        The validated, normalized configuration

    Raises:
        S3ConfigurationError: If the record is not a mapping, a required
            field is missing, or a field has the wrong type
    """
    if isinstance(record, ClientConfig):
        return record

    if not isinstance(record, Mapping):
        raise S3ConfigurationError(
            f"Cannot convert {type(record).__name__} to ClientConfig"
        )

    missing = [name for name in REQUIRED_FIELDS if record.get(name) is None]
    if missing:
        raise S3ConfigurationError(missing_fields=missing)

    data = {
        name: record.get(name)
        for name in REQUIRED_FIELDS + OPTIONAL_FIELDS
        if name in record
    }

    try:
        return ClientConfig.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else None
        value_type = type(data.get(field)).__name__ if field else None
        raise S3ConfigurationError(
            f"Invalid value for '{field}' ({value_type}): {error['msg']}",
            field=field,
            expected=_expected_type(field) if field else None,
        ) from e
