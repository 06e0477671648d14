import argparse
import json
import logging
import sys

from race_recap import __version_date__, get_git_hash
from race_recap.config import load_config, sampler_params_from_config
from race_recap.errors import RouteProcessingError
from race_recap.formatters import format_distance, format_duration
from race_recap.pipeline import load_route_file, result_to_dict

# Default values for CLI options
DEFAULTS = {
    "sample_count": 5,
}


def build_parser(config: dict | None = None) -> argparse.ArgumentParser:
    """Build argument parser with defaults from config file."""
    if config is None:
        config = {}

    def get_default(key: str):
        return config.get(key, DEFAULTS[key])

    parser = argparse.ArgumentParser(
        description="Summarize a GPX race route into evenly spaced recap markers."
    )
    parser.add_argument("gpx_file", help="Path to GPX file")
    parser.add_argument(
        "--samples",
        type=int,
        default=get_default("sample_count"),
        help=f"Number of recap markers, at least 2 (default: {DEFAULTS['sample_count']})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON instead of a text report",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"race-recap {__version_date__} ({get_git_hash()})",
    )
    return parser


def print_report(result) -> None:
    stats = result.statistics
    print("=== GPX Race Recap ===")
    print(f"Route:          {result.document.name}")
    print(f"Track Points:   {len(result.document.points)}")
    print(f"Waypoints:      {len(result.document.waypoints)}")
    print(f"Distance:       {format_distance(stats.total_distance_km)}")
    gain_ft = stats.elevation_gain_m * 3.28084
    print(f"Elevation Gain: {stats.elevation_gain_m:.0f} m ({gain_ft:.0f} ft)")
    loss_ft = stats.elevation_loss_m * 3.28084
    print(f"Elevation Loss: {stats.elevation_loss_m:.0f} m ({loss_ft:.0f} ft)")
    print(f"Elevation:      {stats.min_elevation_m:.0f} - {stats.max_elevation_m:.0f} m")
    print(f"Duration:       {format_duration(stats.duration_ms)}")

    if not result.summaries:
        print("No track points to sample.")
        return

    print("")
    print("=== Markers ===")
    for summary in result.summaries:
        print(
            f"{summary.index}. {summary.label} (mile {summary.mile_marker:.1f}) "
            f"pace {summary.pace_text}/mi, HR {summary.heart_rate_bpm} bpm"
        )
        print(f"   {summary.narrative}")


def main(argv: list[str] | None = None) -> None:
    config = load_config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    params = sampler_params_from_config(config)

    try:
        result = load_route_file(args.gpx_file, args.samples, params)
    except FileNotFoundError:
        print(f"Error: File not found: {args.gpx_file}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: Could not read {args.gpx_file}: {e.strerror or e}", file=sys.stderr)
        sys.exit(1)
    except (RouteProcessingError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2))
    else:
        print_report(result)
