import sys
from pathlib import Path

import toml
from tqdm import tqdm

from hamchart.coordinates import InvalidCoordinate, LATITUDE, LONGITUDE, require_coordinate
from hamchart.form import ChartForm, DEFAULT_PAPER_SIZES_MM
from hamchart.maidenhead import InvalidLocator, require_locator

ROOT_DIR = Path(__file__).resolve().parent.parent
CONFIG_FILE = ROOT_DIR / "chart_config.toml"

DEFAULT_CONFIG = {
    "form": {
        "metric": False,
        "size": "letter",
        "server_url": "http://127.0.0.1:8080/chart",
        "timeout": 60,
    },
}


def load_config(path=None):
    """
    Read chart_config.toml, filling anything missing with defaults.

    Paper sizes are returned in millimetres under config["paper_sizes_mm"].
    """
    path = Path(path) if path else CONFIG_FILE
    loaded = toml.load(str(path)) if path.exists() else {}

    config = {"form": dict(DEFAULT_CONFIG["form"])}
    config["form"].update(loaded.get("form", {}))

    sizes = dict(DEFAULT_PAPER_SIZES_MM)
    for name, paper in loaded.get("paper", {}).items():
        sizes[name.lower()] = (float(paper["width_mm"]), float(paper["height_mm"]))
    config["paper_sizes_mm"] = sizes
    return config


def print_examples():
    """Print usage examples."""
    print("""
Chart Position Tool
===================

Usage:
  python chart_position.py --latitude <lat> --longitude <long> [options]
  python chart_position.py --locator <locator> [options]

Examples:
  # Decimal degrees
  python chart_position.py -lat 40.4168 -long -3.7038 -n "Madrid"

  # Degrees, minutes and seconds need a hemisphere letter
  python chart_position.py -lat "40 25 0.5 N" -long "3 42 13.7 W"
  python chart_position.py -lat "33°51'35\\"S" -long "151°12'40\\"E"

  # Maidenhead locator (4 or 6 characters)
  python chart_position.py -l FN42
  python chart_position.py -l IN73dm --metric

  # Normalize a file of "lat, long" lines or locators
  python chart_position.py --batch positions.txt

  # Request the PDF chart from a running chart server
  python chart_position.py -l FN42 --server http://127.0.0.1:8080/chart -o fn42.pdf

Options:
  --latitude, -lat   Latitude (N/S)
  --longitude, -long Longitude (E/W)
  --locator, -l      Maidenhead locator, overrides latitude/longitude
  --name, -n         Chart name
  --metric           Metric units (selects A4 paper unless --size is given)
  --size, -s         Paper size: letter, a4, a3
  --batch, -b        File with one position per line
  --server           Chart server URL
  --output, -o       Where to save the chart PDF
  --config           Alternative configuration file
""")


def build_form(args, config):
    """
    Run the command line values through the same handlers the chart page uses.

    Raises:
        InvalidLocator: If --locator is not a valid locator
        InvalidCoordinate: If a coordinate is missing or cannot be parsed
    """
    form = ChartForm(paper_sizes_mm=config["paper_sizes_mm"])
    if config["form"]["metric"] or args.metric:
        form.metric_changed(True)
    # A configured size counts as a user choice and unties it from "metric".
    if config["form"]["size"] != ChartForm.size:
        form.size_changed(config["form"]["size"])
    if args.size:
        form.size_changed(args.size)

    if args.locator:
        cell = require_locator(args.locator)
        form.apply_locator(args.locator)
        print(f"✓ Decoded {cell.label}")
    else:
        if not args.latitude or not args.longitude:
            raise InvalidCoordinate("--latitude and --longitude are required without --locator.")
        # The form only records validity, so surface the reason here.
        require_coordinate(args.latitude, LATITUDE.positive, LATITUDE.negative, LATITUDE.maximum, LATITUDE.minimum)
        require_coordinate(args.longitude, LONGITUDE.positive, LONGITUDE.negative, LONGITUDE.maximum, LONGITUDE.minimum)
        form.latitude_changed(args.latitude)
        form.longitude_changed(args.longitude)

    if args.name is not None:
        form.name = args.name
    return form


def resolve_cli_input(args, config):
    # Nothing to normalize, show examples
    if not (args.latitude or args.longitude or args.locator):
        print_examples()
        sys.exit(0)

    try:
        return build_form(args, config)
    except (InvalidLocator, InvalidCoordinate) as e:
        print(f"✗ Error: {e}")
        sys.exit(1)


def normalize_line(line):
    """Return "lat, long" for a position line or locator, or None if invalid."""
    form = ChartForm()
    if "," in line:
        latitude, longitude = line.split(",", 1)
        form.latitude_changed(latitude.strip())
        form.longitude_changed(longitude.strip())
    elif not form.apply_locator(line):
        return None

    if not form.is_submittable():
        return None
    return f"{form.latitude}, {form.longitude}"


def normalize_batch(path, out=None):
    """
    Normalize every position in a text file.

    Blank lines and lines starting with '#' are skipped.

    Returns:
        Number of invalid lines
    """
    lines = [line.strip() for line in Path(path).read_text(encoding="utf-8").splitlines()]
    lines = [line for line in lines if line and not line.startswith("#")]

    invalid = 0
    for line in tqdm(lines, desc="Normalizing", unit="position", file=sys.stderr):
        normalized = normalize_line(line)
        if normalized is None:
            invalid += 1
            tqdm.write(f"{line}\tinvalid", file=out)
        else:
            tqdm.write(f"{line}\t{normalized}", file=out)
    return invalid


def describe(form):
    width, height = form.paper_size_inches()
    print(f"✓ Latitude: {form.latitude}")
    print(f"✓ Longitude: {form.longitude}")
    if form.name:
        print(f"✓ Name: {form.name}")
    print(f"✓ Paper: {form.size} ({width:.2f} x {height:.2f} in){' metric' if form.metric else ''}")
