"""CLI utilities using Typer."""

from dataclasses import replace
from pathlib import Path

import typer
from PIL import Image
from tqdm import tqdm

from imghash.core.config import get_settings
from imghash.core.logging import configure_logging
from imghash.hashing.codec import decode_hash, format_shaped_hash, parse_shaped_hash
from imghash.hashing.config import ColorSpace, HashAlgorithm, HashConfig
from imghash.hashing.exceptions import ImageHashError
from imghash.hashing.image_hash import ImageHash
from imghash.services.perceptual_hash import (
    are_hashes_similar,
    compute_image_hash,
    compute_image_hashes,
)

app = typer.Typer(help="Perceptual image hashing CLI")


@app.callback()
def main() -> None:
    """Compute and compare perceptual image hashes."""
    configure_logging()


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _parse_hash(value: str, width: int, height: int) -> ImageHash:
    """Accept either a shaped hash ("8x8:...") or a plain hex digest."""
    if ":" in value:
        return parse_shaped_hash(value)
    return decode_hash(value, width, height)


def _build_config(
    width: int | None,
    height: int | None,
    factor: int | None,
    color_space: ColorSpace | None,
) -> HashConfig:
    """Overlay the options that were given on the IMGHASH_* defaults."""
    config = HashConfig.from_settings()
    return replace(
        config,
        width=config.width if width is None else width,
        height=config.height if height is None else height,
        factor=config.factor if factor is None else factor,
        color_space=config.color_space if color_space is None else color_space,
    )


@app.command("hash")
def hash_image(
    path: Path = typer.Argument(..., help="Image file to hash"),
    algorithm: HashAlgorithm | None = typer.Option(
        None, "--algorithm", "-a", help="Hashing algorithm (default: IMGHASH_ALGORITHM)"
    ),
    width: int | None = typer.Option(None, help="Hash width in bits (default: IMGHASH_WIDTH)"),
    height: int | None = typer.Option(
        None, help="Hash height in bits (default: IMGHASH_HEIGHT)"
    ),
    factor: int | None = typer.Option(
        None, help="Perceptual hash upscale factor (default: IMGHASH_FACTOR)"
    ),
    color_space: ColorSpace | None = typer.Option(
        None, help="Grayscale weighting (default: IMGHASH_COLOR_SPACE)"
    ),
    shaped: bool = typer.Option(False, help="Prefix the digest with WIDTHxHEIGHT:"),
) -> None:
    """Print the hash of one image."""
    try:
        config = _build_config(width, height, factor, color_space)
        image_hash = compute_image_hash(path, algorithm, config)
    except (ImageHashError, OSError, Image.DecompressionBombError) as e:
        _fail(f"Hashing failed: {e}")
        return

    typer.echo(format_shaped_hash(image_hash) if shaped else image_hash.encode())


@app.command()
def compare(
    hash_a: str = typer.Argument(..., help="First hash (hex or WIDTHxHEIGHT:hex)"),
    hash_b: str = typer.Argument(..., help="Second hash (hex or WIDTHxHEIGHT:hex)"),
    width: int | None = typer.Option(
        None, help="Width for plain hex hashes (default: IMGHASH_WIDTH)"
    ),
    height: int | None = typer.Option(
        None, help="Height for plain hex hashes (default: IMGHASH_HEIGHT)"
    ),
    threshold: int | None = typer.Option(
        None, help="Maximum distance for a match (default: IMGHASH_SIMILARITY_THRESHOLD)"
    ),
) -> None:
    """Print the Hamming distance between two hashes."""
    settings = get_settings()
    if width is None:
        width = settings.hash_width
    if height is None:
        height = settings.hash_height
    if threshold is None:
        threshold = settings.similarity_threshold

    try:
        first = _parse_hash(hash_a, width, height)
        second = _parse_hash(hash_b, width, height)
        distance = first - second
    except ImageHashError as e:
        _fail(f"Comparison failed: {e}")
        return

    typer.echo(f"Distance: {distance}")
    if are_hashes_similar(first, second, threshold):
        typer.secho(f"Similar (threshold {threshold})", fg=typer.colors.GREEN)
    else:
        typer.secho(f"Different (threshold {threshold})", fg=typer.colors.YELLOW)


@app.command()
def batch(
    directory: Path = typer.Argument(..., help="Directory to scan"),
    pattern: str = typer.Option("*", help="Glob pattern for image files"),
    algorithm: HashAlgorithm | None = typer.Option(
        None, "--algorithm", "-a", help="Hashing algorithm (default: IMGHASH_ALGORITHM)"
    ),
    width: int | None = typer.Option(None, help="Hash width in bits (default: IMGHASH_WIDTH)"),
    height: int | None = typer.Option(
        None, help="Hash height in bits (default: IMGHASH_HEIGHT)"
    ),
    factor: int | None = typer.Option(
        None, help="Perceptual hash upscale factor (default: IMGHASH_FACTOR)"
    ),
    color_space: ColorSpace | None = typer.Option(
        None, help="Grayscale weighting (default: IMGHASH_COLOR_SPACE)"
    ),
    workers: int | None = typer.Option(
        None, help="Thread pool size (default: IMGHASH_MAX_WORKERS)"
    ),
) -> None:
    """Hash every matching file in a directory.

    Prints one "path<TAB>WIDTHxHEIGHT:hex" line per image, sorted by path.

    Example:
        imghash batch ./photos --pattern "*.jpg" --workers 8
    """
    if not directory.is_dir():
        _fail(f"Not a directory: {directory}")

    paths = sorted(p for p in directory.glob(pattern) if p.is_file())
    try:
        config = _build_config(width, height, factor, color_space)
    except ImageHashError as e:
        _fail(str(e))
        return

    with tqdm(total=len(paths), desc="Hashing", unit="img", disable=not paths) as pbar:
        result = compute_image_hashes(
            paths,
            algorithm=algorithm,
            config=config,
            max_workers=workers,
            progress_callback=pbar.update,
        )

    for path in sorted(result.hashes):
        typer.echo(f"{path}\t{format_shaped_hash(result.hashes[path])}")

    typer.echo(f"Hashed: {len(result.hashes)}/{result.total}")
    if result.errors:
        for path, message in sorted(result.errors.items()):
            typer.secho(f"Failed: {path}: {message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
