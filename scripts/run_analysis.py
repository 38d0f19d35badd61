"""Run one Moody surface plate analysis and write the report and plot files."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Add `src` to sys.path so this script works even before `pip install -e .`.
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
SRC_DIR: Path = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from moody_surface_plate.analysis import AnalysisConfig, analyze
from moody_surface_plate.errors import PlateInputError
from moody_surface_plate.export import write_gnuplot_files
from moody_surface_plate.logging_config import setup_logging
from moody_surface_plate.report import format_report

LICENSE_TEXT: str = (
    "Moody Surface Plate Analysis\n"
    "This program comes with ABSOLUTELY NO WARRANTY.\n"
    "This is free software, and you are welcome to redistribute it\n"
    "under the conditions of the GNU General Public License.\n"
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for one analysis run."""
    parser = argparse.ArgumentParser(
        description="Compute a surface plate height map from Union Jack readings."
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path("."),
        help="Directory holding the eight <LINE>.txt reading files.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config.txt or a .toml settings file. Defaults to DATA_DIR/Config.txt.",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Where to write gnuplot.cmd and gnuplot.dat. Defaults to DATA_DIR.",
    )
    parser.add_argument("--no-plot", action="store_true", help="Skip gnuplot files.")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    parser.add_argument("--log-file", type=str, default=None)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Analyze, print the worksheets, and write the plot files."""
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    config = AnalysisConfig(
        data_dir=args.data_dir,
        config_path=args.config,
        out_dir=args.out_dir,
    )

    try:
        result = analyze(config)
    except PlateInputError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(LICENSE_TEXT)
    print(format_report(result))

    if not args.no_plot:
        command_path, data_path = write_gnuplot_files(
            result.layout,
            result.plate_config.units,
            config.resolved_out_dir(),
        )
        print(f"Plot files: {command_path} {data_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
