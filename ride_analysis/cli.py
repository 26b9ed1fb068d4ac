"""
Command-line interface.

Usage:
    ride-analysis analyze ride.gpx
    ride-analysis analyze ride.gpx --weight 72 --provider weatherapi --json
    ride-analysis analyze ride.gpx --no-terrain-api
    ride-analysis providers
"""

import json
from pathlib import Path

import click

from ride_analysis.config import settings
from ride_analysis.features.analysis import RideAnalysisResult, RideAnalysisService
from ride_analysis.features.weather.providers import PROVIDER_CLASSES
from ride_analysis.logging_setup import setup_logging
from ride_analysis.shared.errors import ParseError, ValidationError


@click.group()
def cli():
    """Cycling ride analysis tools."""
    pass


@cli.command()
@click.argument("gpx_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--weight", default=None, type=float, help="Rider weight in kg")
@click.option(
    "--provider",
    default=None,
    type=click.Choice([p.value for p in PROVIDER_CLASSES], case_sensitive=False),
    help="Weather provider (overrides WEATHER_PROVIDER)"
)
@click.option("--no-terrain-api", is_flag=True, help="Classify terrain from elevation only")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
def analyze(gpx_file, weight, provider, no_terrain_api, as_json):
    """
    Analyze a GPX ride.

    Prints distance, duration, calories, weather and terrain.
    """
    # Keep stdout clean for JSON consumers
    setup_logging("WARNING" if as_json else None)

    service = RideAnalysisService.from_settings(
        settings,
        weather_provider=provider,
        enable_terrain_api=False if no_terrain_api else None,
    )

    try:
        result = service.analyze_sync(gpx_file.read_bytes(), rider_weight_kg=weight)
    except (ParseError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        click.echo(format_summary(result))


@cli.command()
def providers():
    """List weather providers and their history depth."""
    click.echo(f"{'Provider':16} | {'History':>8} | Configured")
    click.echo("-" * 42)
    for kind, provider_cls in PROVIDER_CLASSES.items():
        provider = provider_cls(api_key=settings.api_key_for(kind.value))
        configured = "Yes" if provider.is_configured() else "No"
        click.echo(
            f"{kind.value:16} | {provider.max_historical_days_supported:>6}d | {configured}"
        )


def format_summary(result: RideAnalysisResult) -> str:
    """Human-readable report for the console."""
    m = result.metrics
    lines = [
        f"Route: {result.route_name or 'Unnamed'}",
        "-" * 50,
        f"Distance:   {m.distance_km:.2f} km",
        f"Duration:   {m.duration_seconds / 60:.0f} min "
        f"(moving {m.moving_time_seconds / 60:.0f} min)",
        f"Avg speed:  {m.average_speed_kmh:.1f} km/h (max {m.max_speed_kmh:.1f})",
    ]
    if m.elevation_gain_meters is not None:
        lines.append(
            f"Elevation:  +{m.elevation_gain_meters:.0f} m / -{m.elevation_loss_meters:.0f} m"
        )

    lines.append("")
    lines.append(f"Calories:   {result.calories.total_calories} kcal "
                 f"({result.calories.rider_weight_kg:.0f} kg rider)")
    for entry in result.calories.breakdown:
        lines.append(
            f"  {entry.factor:14} {entry.calories:>6} kcal {entry.percentage:>4}%  {entry.description}"
        )

    lines.append("")
    w = result.weather
    if w.has_data:
        lines.append(
            f"Weather:    {w.condition}, {w.temperature_c:.1f}°C, "
            f"humidity {w.humidity_percent:.0f}%, wind {w.wind_speed_kmh:.1f} km/h ({w.provider})"
        )
    else:
        lines.append("Weather:    no data")

    lines.append("")
    t = result.terrain
    lines.append(
        f"Terrain:    {t.summary.dominant_terrain.value} dominant, "
        f"{len(t.segments)} segments "
        f"({t.remote_classifications}/{t.sampled_points} samples from OSM)"
    )
    for terrain, percentage in sorted(t.summary.percentages.items(), key=lambda kv: -kv[1]):
        lines.append(f"  {terrain:14} {percentage:>5.1f}%")

    return "\n".join(lines)


if __name__ == "__main__":
    cli()
