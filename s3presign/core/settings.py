"""Environment-driven settings for s3presign."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from s3presign.core.config import ClientConfig, parse_client_config


class S3presignSettings(BaseSettings):
    """Connection settings read from ``S3PRESIGN_*`` environment variables.

    Values may also come from a ``.env`` file in the working directory.
    Validation of the values themselves is left to :func:`parse_client_config`
    so that settings and host records are held to the same rules.
    """

    model_config = SettingsConfigDict(
        env_prefix="S3PRESIGN_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    bucket: str | None = None
    region: str | None = None
    upload_path: str | None = None
    access_id: str | None = None
    access_key: str | None = None
    endpoint_url: str | None = None
    base_domain: str | None = None

    def to_client_config(self) -> ClientConfig:
        """Build a ClientConfig from these settings.

        Raises:
            S3ConfigurationError: If a required value is not set
        """
        return parse_client_config(self.model_dump())
