#!/usr/bin/env python3
"""CLI commands for location references and search regions."""

import json
import sys

import click

from locref.core.config import Settings
from locref.core.exceptions import LocationReferenceError
from locref.core.logging import configure_logging
from locref.core.spatial import SpatialService
from locref.core.units import Unit, convert as convert_units
from locref.models.geographic import GeoPoint


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
@click.pass_context
def cli(ctx, log_level):
    """Location reference tools."""
    settings = Settings()
    configure_logging(
        level=log_level or settings.LOG_LEVEL, json_logs=settings.JSON_LOGS
    )
    ctx.obj = settings


@cli.command()
@click.argument("reference")
@click.option("--format", "fmt", default="address", help="Location reference format")
@click.option("--backend", default=None, help="Override GEOCODING_BACKEND")
@click.pass_obj
def resolve(settings, reference, fmt, backend):
    """Resolve a location reference and print the result as JSON."""
    from locref.core.geocoding import LocationReferenceResolver

    if backend:
        settings = settings.model_copy(update={"GEOCODING_BACKEND": backend})

    try:
        resolver = LocationReferenceResolver.from_settings(settings)
    except LocationReferenceError as e:
        raise click.ClickException(str(e)) from e

    success, result = resolver.resolve(reference, fmt)
    click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    if not success:
        sys.exit(1)


@cli.command("search-box")
@click.option("--bbox", default=None, help="minLon,minLat,maxLon,maxLat")
@click.option("--point", default=None, help="lat,lon center of a radius search")
@click.option("--radius", default=None, type=float, help="Search radius")
@click.option(
    "--unit",
    default=Unit.MILE.value,
    type=click.Choice([unit.value for unit in Unit]),
    help="Unit of the radius",
)
@click.pass_obj
def search_box(settings, bbox, point, radius, unit):
    """Print the search polygon for a bounding box or a point and radius."""
    service = SpatialService.from_settings(settings)

    try:
        if bbox:
            polygon = service.search_box_from_bbox(bbox)
        elif point and radius is not None:
            lat, lon = (float(value) for value in point.split(","))
            polygon = service.search_box_from_point(
                GeoPoint(latitude=lat, longitude=lon), radius, unit
            )
        else:
            raise click.UsageError("Give --bbox, or --point with --radius")
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    click.echo(polygon.wkt)


@cli.command()
@click.argument("value")
@click.argument("from_unit")
@click.argument("to_unit")
def convert(value, from_unit, to_unit):
    """Convert VALUE from FROM_UNIT to TO_UNIT."""
    try:
        click.echo(convert_units(value, from_unit, to_unit))
    except LocationReferenceError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    cli()
