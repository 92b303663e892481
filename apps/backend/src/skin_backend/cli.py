"""CLI for the overlay backend."""

from __future__ import annotations

import base64
import logging
from pathlib import Path

import click
from flask.cli import load_dotenv
from PIL import Image

from skin_compositor import (
    CompositorError,
    composite_skin,
    decode_overlay,
    decode_png,
    derive_cache_key,
    encode_png,
)

from .app import create_app
from .config import Config

logger = logging.getLogger(__name__)


def _read_overlay(path: Path) -> tuple[str, Image.Image]:
    """Load an overlay file as its base64 payload and decoded image.

    PNG files are encoded to base64 so the printed cache key matches what
    a client posting the same file would get.
    """
    raw = path.read_bytes()
    if raw.startswith(b"\x89PNG"):
        payload = base64.b64encode(raw).decode("ascii")
    else:
        payload = raw.decode("utf-8").strip()
    return payload, decode_overlay(payload)


@click.group()
def cli() -> None:
    """MineSkin overlay service."""
    load_dotenv()


@cli.command()
@click.option("-h", "--host", default=None, help="Bind host (default: OVERLAY_HOST or 0.0.0.0)")
@click.option("-p", "--port", default=None, type=int, help="Bind port (default: OVERLAY_PORT or 8080)")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def serve(host: str | None, port: int | None, verbose: bool) -> None:
    """Run the HTTP service."""
    config = Config.load()
    app = create_app(config)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    service = app.extensions["overlay_service"]
    bind_host = host or config.host
    bind_port = port or config.port
    logger.info("Server starting on http://%s:%d", bind_host, bind_port)
    try:
        app.run(host=bind_host, port=bind_port, debug=False, use_reloader=False)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        service.close()


@cli.command()
@click.argument("base", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("overlay", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, writable=True, path_type=Path))
@click.option("--base-url", default=None, help="URL the base is served from, for the cache key")
def compose(base: Path, overlay: Path, output: Path, base_url: str | None) -> None:
    """Composite OVERLAY onto BASE locally and write the PNG to OUTPUT.

    OVERLAY may be a PNG file or a text file holding base64 PNG data,
    optionally with a data-URI prefix.
    """
    try:
        base_image = decode_png(base.read_bytes())
        payload, overlay_image = _read_overlay(overlay)
        png_bytes = encode_png(composite_skin(base_image, overlay_image))
    except (CompositorError, UnicodeDecodeError) as e:
        raise click.UsageError(str(e)) from e

    output.write_bytes(png_bytes)
    click.echo(f"Wrote {output} ({base_image.width}x{base_image.height})")
    click.echo(f"Cache key: {derive_cache_key(base_url or base.resolve().as_uri(), payload)}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
