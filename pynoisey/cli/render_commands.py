"""
Noise rendering CLI commands for pynoisey.

Command line interface for sampling a generator described in a noise JSON
document onto a grid and writing it as a PNG image, a numpy array or an
ASCII shade image.
"""

import logging
import sys

import click
import numpy as np
from PIL import Image

from ..config import NoiseConfigError, NoiseJSON
from ..grid import Builder2D, Builder2DBounds
from ..noise import Source2D

ASCII_SHADES = " ░▒▓█"


def normalize(values: np.ndarray) -> np.ndarray:
    """Rescale values to [0, 1]. Constant input maps to zeros."""
    vmin = float(values.min())
    vmax = float(values.max())
    if vmin == vmax:
        return np.zeros_like(values)
    return (values - vmin) / (vmax - vmin)


def to_ascii(values: np.ndarray) -> str:
    """Render values as lines of shade characters, darkest for the lowest value."""
    levels = np.minimum(
        (normalize(values) * len(ASCII_SHADES)).astype(np.int64), len(ASCII_SHADES) - 1
    )
    return "\n".join("".join(ASCII_SHADES[v] for v in row) for row in levels)


def to_image(values: np.ndarray, uint: bool = False, cmap: str = None) -> Image.Image:
    """
    Convert a value grid to a PIL image.

    Args:
        values: 2D array of noise values
        uint: Write 8-bit grayscale instead of 16-bit
        cmap: Name of a matplotlib colormap; produces an RGB image
    """
    normalized = normalize(values)

    if cmap is not None:
        import matplotlib

        try:
            colormap = matplotlib.colormaps[cmap]
        except KeyError:
            raise ValueError(f"Unknown colormap: {cmap}") from None
        rgba = colormap(normalized)
        return Image.fromarray((rgba[..., :3] * 255).astype(np.uint8))

    if uint:
        return Image.fromarray((normalized * 255).astype(np.uint8))
    return Image.fromarray((normalized * 65535).astype(np.uint16))


@click.command()
@click.argument("config", type=click.Path(exists=True, dir_okay=False))
@click.option("-g", "--generator", default="basic", show_default=True,
              help="Name of the generator to render")
@click.option("-W", "--width", type=click.IntRange(min=1), default=256, show_default=True,
              help="Grid width in cells")
@click.option("-H", "--height", type=click.IntRange(min=1), default=256, show_default=True,
              help="Grid height in cells")
@click.option("--bounds", type=float, nargs=4, default=None,
              metavar="MINX MINY MAXX MAXY",
              help="Field-space rectangle (default: 0 0 width*0.01 height*0.01)")
@click.option("-o", "--output", type=click.Path(), default=None,
              help="Output file (.png or .npy; default: config name with .png extension)")
@click.option("--cmap", default=None, help="Colorize the PNG with a matplotlib colormap")
@click.option("--uint", is_flag=True, default=False,
              help="Save grayscale PNG as uint8 (0-255) instead of uint16")
@click.option("--seed-offset", type=int, default=0, show_default=True,
              help="Add this value to every seed in the document")
@click.option("--ascii", "as_ascii", is_flag=True, default=False,
              help="Print an ASCII shade image instead of writing a file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def render(config, generator, width, height, bounds, output, cmap, uint, as_ascii, seed_offset,
           verbose):
    """
    Render a generator from a noise JSON document.

    CONFIG: Path to the noise JSON document

    Examples:

        # Render the "basic" generator to noise.png
        pnz-render noise.json

        # Render a named generator over a custom rectangle
        pnz-render noise.json -g terrain --bounds 0 0 6 6 -o terrain.png --cmap terrain

        # Keep the raw values
        pnz-render noise.json -o values.npy

        # Quick look in the terminal
        pnz-render noise.json -W 64 -H 32 --ascii

        # Another variation of the same document
        pnz-render noise.json --seed-offset 3 -o variant.png
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        if verbose:
            click.echo(f"Loading noise configuration from '{config}'...")
        bank = NoiseJSON.load(config)
        if seed_offset:
            bank.seeds = {name: seed + seed_offset for name, seed in bank.seeds.items()}
        bank.build_sources()
        bank.build_generators()

        source = bank.get_generator(generator)
        if source is None:
            raise NoiseConfigError(f'No generator named "{generator}" in {config}.',
                                   reference=generator)
        if not isinstance(source, Source2D):
            raise NoiseConfigError(f'Generator "{generator}" is not a 2D field and cannot be rendered.',
                                   reference=generator)

        if not bounds:
            bounds = (0.0, 0.0, width * 0.01, height * 0.01)
        builder = Builder2D(source, width, height, Builder2DBounds(*bounds))

        if verbose:
            click.echo(f"Sampling '{generator}' on a {width}x{height} grid over {bounds}...")
        values = builder.build()
        vmin, vmax = builder.get_min_max()

        if as_ascii:
            click.echo(to_ascii(values))
            return

        if output is None:
            output = config.rsplit(".", 1)[0] + ".png"

        if output.endswith(".npy"):
            np.save(output, values)
        else:
            to_image(values, uint=uint, cmap=cmap).save(output)

        if verbose:
            click.echo(f"Rendering completed! Range: {vmin}-{vmax}")
        else:
            click.echo(f"Rendered '{generator}' -> '{output}'")

    except NoiseConfigError as e:
        click.echo(f"Error: invalid noise configuration - {e}", err=True)
        sys.exit(1)

    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    render()
