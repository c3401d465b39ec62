"""Tests for configuration resolution and settings."""

import pytest
from pydantic import ValidationError

from s3presign.core.config import ClientConfig, parse_client_config
from s3presign.core.exceptions import S3ConfigurationError
from s3presign.core.settings import S3presignSettings
from s3presign.testing.utils import create_test_config


class TestParseClientConfig:
    """Tests for parse_client_config."""

    def test_valid_record(self):
        """Test parsing a complete record."""
        config = parse_client_config(create_test_config(
            endpoint_url="http://localhost:9000",
        ))

        assert isinstance(config, ClientConfig)
        assert config.bucket == "test-bucket"
        assert config.region == "us-east-1"
        assert config.upload_path == "uploads"
        assert config.endpoint_url == "http://localhost:9000"
        assert config.base_domain == "cdn.example.com"

    def test_optional_fields_absent(self):
        """Test that endpoint_url and base_domain may be omitted."""
        record = create_test_config()
        del record["endpoint_url"]
        del record["base_domain"]

        config = parse_client_config(record)

        assert config.endpoint_url is None
        assert config.base_domain is None

    def test_empty_optional_fields_are_none(self):
        """Test that empty strings count as absent for optional fields."""
        config = parse_client_config(create_test_config(base_domain="", endpoint_url=""))

        assert config.base_domain is None
        assert config.endpoint_url is None

    def test_unknown_keys_ignored(self):
        """Test that unrecognized keys are dropped."""
        config = parse_client_config(create_test_config(colour="blue"))

        assert not hasattr(config, "colour")

    def test_existing_config_returned(self):
        """Test that a ClientConfig passes through unchanged."""
        config = parse_client_config(create_test_config())

        assert parse_client_config(config) is config

    def test_upload_path_slashes_stripped(self):
        """Test upload_path normalization."""
        config = parse_client_config(create_test_config(upload_path="/media/uploads/"))

        assert config.upload_path == "media/uploads"

    def test_base_domain_trailing_slash_stripped(self):
        """Test base_domain normalization."""
        config = parse_client_config(create_test_config(base_domain="cdn.example.com/"))

        assert config.base_domain == "cdn.example.com"

    def test_upload_path_only_slashes_rejected(self):
        """Test that an upload_path of only slashes is rejected."""
        with pytest.raises(S3ConfigurationError) as exc_info:
            parse_client_config(create_test_config(upload_path="///"))

        assert exc_info.value.field == "upload_path"

    def test_missing_required_fields(self):
        """Test that every missing required field is reported."""
        record = create_test_config()
        del record["bucket"]
        record["access_key"] = None

        with pytest.raises(S3ConfigurationError) as exc_info:
            parse_client_config(record)

        assert exc_info.value.missing_fields == ["bucket", "access_key"]
        assert "bucket" in str(exc_info.value)

    def test_empty_required_field(self):
        """Test that an empty required string is rejected."""
        with pytest.raises(S3ConfigurationError) as exc_info:
            parse_client_config(create_test_config(region=""))

        assert exc_info.value.field == "region"

    def test_non_text_base_domain_rejected(self):
        """Test that base_domain must be text or absent."""
        with pytest.raises(S3ConfigurationError) as exc_info:
            parse_client_config(create_test_config(base_domain=42))

        assert exc_info.value.field == "base_domain"
        assert exc_info.value.expected == "str | None"
        assert "base_domain" in str(exc_info.value)

    def test_non_text_endpoint_url_rejected(self):
        """Test that endpoint_url must be text or absent."""
        with pytest.raises(S3ConfigurationError) as exc_info:
            parse_client_config(create_test_config(endpoint_url=["http://x"]))

        assert exc_info.value.field == "endpoint_url"
        assert exc_info.value.expected == "str | None"

    def test_non_text_required_field_rejected(self):
        """Test that required fields are not coerced from other types."""
        with pytest.raises(S3ConfigurationError) as exc_info:
            parse_client_config(create_test_config(bucket=123))

        assert exc_info.value.field == "bucket"
        assert exc_info.value.expected == "str"

    def test_non_mapping_rejected(self):
        """Test that non-mapping records are rejected."""
        with pytest.raises(S3ConfigurationError, match="Cannot convert list"):
            parse_client_config(["bucket", "region"])

    def test_config_is_immutable(self):
        """Test that ClientConfig cannot be modified."""
        config = parse_client_config(create_test_config())

        with pytest.raises(ValidationError):
            config.bucket = "other"

    def test_access_key_hidden_from_repr(self):
        """Test that the secret key is not shown in repr."""
        config = parse_client_config(create_test_config(access_key="supersecret"))

        assert "supersecret" not in repr(config)


class TestS3presignSettings:
    """Tests for environment-driven settings."""

    def test_from_environment(self, monkeypatch):
        """Test reading settings from S3PRESIGN_* variables."""
        monkeypatch.setenv("S3PRESIGN_BUCKET", "env-bucket")
        monkeypatch.setenv("S3PRESIGN_REGION", "eu-west-1")
        monkeypatch.setenv("S3PRESIGN_UPLOAD_PATH", "files")
        monkeypatch.setenv("S3PRESIGN_ACCESS_ID", "id")
        monkeypatch.setenv("S3PRESIGN_ACCESS_KEY", "key")

        config = S3presignSettings(_env_file=None).to_client_config()

        assert config.bucket == "env-bucket"
        assert config.region == "eu-west-1"
        assert config.base_domain is None

    def test_missing_settings(self, monkeypatch):
        """Test that unset required settings are reported."""
        for name in ("BUCKET", "REGION", "UPLOAD_PATH", "ACCESS_ID", "ACCESS_KEY"):
            monkeypatch.delenv(f"S3PRESIGN_{name}", raising=False)

        with pytest.raises(S3ConfigurationError) as exc_info:
            S3presignSettings(_env_file=None).to_client_config()

        assert "bucket" in exc_info.value.missing_fields
