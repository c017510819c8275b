import argparse
import sys

import hamchart.cli
from hamchart.submit import ChartSubmitError, submit_chart


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Normalize a chart position and optionally request the chart",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python chart_position.py -lat "40 25 0.5 N" -long "3 42 13.7 W"
  python chart_position.py -l FN42 --metric
        """,
    )
    parser.add_argument("--latitude", "-lat", dest="latitude", type=str, help="Latitude, decimal or degrees/minutes/seconds with N or S")
    parser.add_argument("--longitude", "-long", dest="longitude", type=str, help="Longitude, decimal or degrees/minutes/seconds with E or W")
    parser.add_argument("--locator", "-l", type=str, help="Maidenhead locator (4 or 6 characters)")
    parser.add_argument("--name", "-n", type=str, help="Chart name (default: locator label when --locator is used)")
    parser.add_argument("--metric", action="store_true", help="Use metric units")
    parser.add_argument("--size", "-s", choices=["letter", "a4", "a3"], help="Paper size (default: from config)")
    parser.add_argument("--batch", "-b", type=str, help="Normalize every position in a file and exit")
    parser.add_argument("--server", type=str, nargs="?", const="", help="Request the PDF from a chart server (default URL: from config)")
    parser.add_argument("--output", "-o", type=str, default="chart.pdf", help="Output file for the chart PDF (default: chart.pdf)")
    parser.add_argument("--config", type=str, help="Configuration file (default: chart_config.toml)")

    args = parser.parse_args(argv)
    config = hamchart.cli.load_config(args.config)

    if args.batch:
        try:
            invalid = hamchart.cli.normalize_batch(args.batch)
        except (OSError, UnicodeDecodeError) as e:
            print(f"\n✗ Error: {e}")
            return 1
        if invalid:
            print(f"✗ {invalid} invalid position(s)", file=sys.stderr)
        return 1 if invalid else 0

    form = hamchart.cli.resolve_cli_input(args, config)
    hamchart.cli.describe(form)

    if args.server is not None:
        server_url = args.server or config["form"]["server_url"]
        try:
            path = submit_chart(form, server_url, args.output, timeout=config["form"]["timeout"])
        except ChartSubmitError as e:
            print(f"\n✗ Error: {e}")
            return 1
        print(f"✓ Done! Chart saved as {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
