"""s3presign CLI tool."""

import functools
import json
import logging
import sys

import click

from s3presign import api
from s3presign.core.exceptions import S3presignError
from s3presign.core.settings import S3presignSettings


def connection_options(func):
    """Add the connection options shared by every storage command."""

    @click.option("--bucket", help="S3 bucket name")
    @click.option("--region", help="Region identifier, e.g. us-east-1")
    @click.option("--upload-path", help="Key prefix for uploads")
    @click.option("--access-id", help="Access key ID")
    @click.option("--access-key", help="Secret access key")
    @click.option("--endpoint", "endpoint_url", help="S3 endpoint URL (MinIO, LocalStack)")
    @click.option("--base-domain", help="Public domain for read URLs")
    @functools.wraps(func)
    def wrapper(*args, bucket, region, upload_path, access_id, access_key,
                endpoint_url, base_domain, **kwargs):
        record = S3presignSettings().model_dump()
        overrides = {
            "bucket": bucket,
            "region": region,
            "upload_path": upload_path,
            "access_id": access_id,
            "access_key": access_key,
            "endpoint_url": endpoint_url,
            "base_domain": base_domain,
        }
        record.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return func(*args, config=record, **kwargs)
        except S3presignError as e:
            raise click.ClickException(str(e))

    return wrapper


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """s3presign CLI - Issue presigned upload links for S3 buckets.

    Connection settings are read from S3PRESIGN_* environment variables
    (or a .env file) and may be overridden with options.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("filename")
@click.argument("size", type=click.IntRange(min=0))
@connection_options
def request(filename, size, config):
    """Create an upload request for FILENAME of SIZE bytes."""
    result = api.create_upload_request(filename, size, config)
    click.echo(json.dumps({
        "read_url": result.read_url,
        "write_url": result.write_url,
        "key": result.object_key,
    }, indent=2))
    if not result.is_writable:
        click.echo("Could not presign the upload; see the log for details", err=True)


@cli.command()
@click.argument("filename")
@connection_options
def exists(filename, config):
    """Show size and content type of FILENAME under the upload path."""
    result = api.check_exists(filename, config)
    if result is None:
        click.echo(f"{filename}: not found", err=True)
        sys.exit(1)
    click.echo(json.dumps({
        "length": result.length,
        "content_type": result.content_type,
    }, indent=2))


@cli.command("list")
@connection_options
def list_command(config):
    """List every key under the upload path."""
    api.list_files(config)


@cli.command()
def version():
    """Show s3presign version."""
    from s3presign import __version__

    click.echo(f"s3presign version: {__version__}")


if __name__ == "__main__":
    cli()
