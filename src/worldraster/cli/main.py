"""worldraster CLI.

Command-line helpers for planning Map grids and checking world <-> pixel
mappings without writing any code.
"""

from __future__ import annotations

import json
from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError

from worldraster import __version__
from worldraster.core.map import plan_grid
from worldraster.exceptions import MapError
from worldraster.geometry import Area, CoordinateMapper, WorldPoint
from worldraster.utils.logging import (
    configure_logging,
    get_logger,
    set_correlation_context,
)

app = typer.Typer(
    name="worldraster",
    help="worldraster: pixel rasters addressed in world coordinates",
    add_completion=False,
)

AreaOption = Annotated[
    tuple[float, float, float, float],
    typer.Option("--area", "-a", help="World area as LEFT BOTTOM WIDTH HEIGHT"),
]
VerboseOption = Annotated[
    int, typer.Option("--verbose", "-v", count=True, help="Increase verbosity")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(json_output: JsonOption = False) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"worldraster {__version__}")


@app.command()
def resolve(
    area: AreaOption,
    resolution: Annotated[
        tuple[float, float],
        typer.Option("--resolution", "-r", help="World units per pixel as X Y"),
    ],
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Compute the pixel grid covering an area at a resolution."""
    _configure_logging(verbose)
    set_correlation_context(operation="resolve")
    logger = get_logger(__name__)

    try:
        world_area = Area.from_tuple(area)
        width, height = plan_grid(world_area, resolution)
    except (MapError, ValidationError) as e:
        _fail(e, json_output)

    mapper = CoordinateMapper.for_grid(world_area, width, height)
    effective = mapper.resolution
    logger.info("Grid resolved", width=width, height=height)

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "width": width,
                    "height": height,
                    "resolution": {"x": effective.x, "y": effective.y},
                },
                indent=2,
            )
        )
    else:
        typer.echo(f"Pixels: {width} x {height}")
        typer.echo(f"Effective resolution: {effective.x:g} x {effective.y:g}")


@app.command(name="map-point")
def map_point(
    area: AreaOption,
    size: Annotated[
        tuple[int, int],
        typer.Option("--size", "-s", help="Pixel dimensions as WIDTH HEIGHT"),
    ],
    point: Annotated[
        tuple[float, float],
        typer.Option("--point", "-p", help="World point as X Y"),
    ],
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Map a world point to pixel coordinates."""
    _configure_logging(verbose)
    set_correlation_context(operation="map-point")
    logger = get_logger(__name__)

    try:
        mapper = CoordinateMapper.for_grid(Area.from_tuple(area), *size)
    except (ValueError, MapError) as e:
        _fail(e, json_output)

    pixel = mapper.map_point(WorldPoint.from_tuple(point))
    logger.info("Point mapped", world=point, pixel=pixel.to_tuple())

    if json_output:
        typer.echo(json.dumps({"x": pixel.x, "y": pixel.y}))
    else:
        typer.echo(f"Pixel: ({pixel.x:g}, {pixel.y:g})")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """worldraster: pixel rasters addressed in world coordinates."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _configure_logging(verbose: int) -> None:
    """Configure logging based on verbosity level."""
    if verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:  # verbose >= 2
        level = "DEBUG"

    configure_logging(level=level)


def _fail(error: Exception, json_output: bool) -> NoReturn:
    """Report an input error and exit with status 1."""
    message = str(error)
    if json_output:
        typer.echo(json.dumps({"error": message}))
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1) from None


if __name__ == "__main__":  # pragma: no cover
    app()
