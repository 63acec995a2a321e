# cli.py
import asyncio
import logging
from pathlib import Path

import click

from s3_providers.errors import S3ProviderError
from s3_providers.providers.cdn import S3CDNProvider
from s3_providers.providers.filesystem import S3FileSystemProvider
from s3_providers.settings import get_settings

logger = logging.getLogger(__name__)


def _run(coro):
    """Run a provider coroutine, turning provider errors into CLI errors."""
    try:
        return asyncio.run(coro)
    except S3ProviderError as e:
        raise click.ClickException(e.message)


def _filesystem() -> S3FileSystemProvider:
    try:
        return S3FileSystemProvider.from_settings()
    except S3ProviderError as e:
        raise click.ClickException(e.message)


def _cdn() -> S3CDNProvider:
    try:
        return S3CDNProvider.from_settings()
    except S3ProviderError as e:
        raise click.ClickException(e.message)


@click.group()
def cli():
    """CLI commands for the S3 filesystem and CDN providers"""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  AWS Region: {settings.aws_region}")
    click.echo(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    click.echo(f"  S3 Bucket: {settings.s3_bucket_name}")
    click.echo(f"  CDN Base URL: {settings.cdn_base_url}")
    click.echo(f"  Log Level: {settings.log_level}")


@cli.command(name="ls")
@click.argument("path", default="")
@click.option("--recursive/--no-recursive", default=False, help="Include nested keys")
def list_directory(path, recursive):
    """List the keys under PATH"""
    fs = _filesystem()

    async def _collect():
        return [key async for key in fs.get_directory_tree(path, recursive=recursive)]

    for key in _run(_collect()):
        click.echo(key)


@cli.command()
@click.argument("path")
def cat(path):
    """Print a file"""
    fs = _filesystem()
    content = _run(fs.read_file(path, encoding=None))
    click.echo(content, nl=False)


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("path")
def put(source, path):
    """Upload local file SOURCE to PATH"""
    fs = _filesystem()
    _run(fs.write_file(path, source.read_bytes()))
    click.echo(f"Wrote {fs.relative_or_absolute_path_to_absolute_path(path)}")


@cli.command()
@click.argument("path")
def rm(path):
    """Delete a file"""
    fs = _filesystem()
    _run(fs.delete_file(path))
    click.echo(f"Deleted {fs.relative_or_absolute_path_to_absolute_path(path)}")


@cli.command()
@click.argument("path")
def mkdir(path):
    """Create a directory marker"""
    fs = _filesystem()
    _run(fs.create_directory(path, recursive=True))
    click.echo(f"Created {fs.relative_or_absolute_path_to_absolute_path(path)}")


@cli.command()
@click.argument("path")
def stat(path):
    """Show file or directory attributes"""
    fs = _filesystem()
    result = _run(fs.stat(path))
    click.echo(result.model_dump_json(indent=2))


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--filename", default=None, help="Object key (generated when omitted)")
@click.option("--content-type", default=None, help="MIME type stored with the object")
def cdn_upload(source, filename, content_type):
    """Upload SOURCE to the CDN bucket and print its URL"""
    cdn = _cdn()
    result = _run(cdn.upload(source.read_bytes(), filename=filename, content_type=content_type))
    click.echo(result.url)


@cli.command()
@click.argument("url")
def cdn_delete(url):
    """Delete the CDN object at URL"""
    cdn = _cdn()
    result = _run(cdn.delete(url))
    click.echo(result.message)
    if not result.success:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
