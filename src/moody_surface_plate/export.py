"""gnuplot command and data files for a 3-d view of the plate surface."""

from __future__ import annotations

from pathlib import Path

from moody_surface_plate.config import Units
from moody_surface_plate.layout import PlateLayout

COMMAND_FILENAME: str = "gnuplot.cmd"
DATA_FILENAME: str = "gnuplot.dat"


def render_gnuplot_command(layout: PlateLayout, units: Units) -> str:
    """Text of the gnuplot command file."""
    bounds = layout.bounds
    lines: list[str] = [
        "# The following command file can be used with gnuplot to produce",
        "# a 3-dimensional plot of the surface plate. The associated data",
        f'# file is called "{DATA_FILENAME}" and can be found in this directory.',
        "#",
        "# On typical Unix/Linux/Mac systems, invoke gnuplot with:",
        f"# gnuplot -c {COMMAND_FILENAME}",
        "",
        "set term X11 enhanced",
        "set xyplane at 0",
    ]
    for label in layout.labels:
        lines.append(f'set label "{label.text}" at {label.x:f}, {label.y:f}, {label.z:f}')
    lines += [
        f"set zrange [0:{bounds.max_z}]",
        f'set zlabel "{units.plot_axis_label}"',
        "set key off",
        f"splot [0:{bounds.max_x}][0:{bounds.max_y}][0:{bounds.max_z}] "
        f'"{DATA_FILENAME}" using 1:2:3 with lines',
        "pause -1",
    ]
    return "\n".join(lines) + "\n"


def render_gnuplot_data(layout: PlateLayout) -> str:
    """Text of the gnuplot data file: one block per line, split by blank lines."""
    parts: list[str] = [
        "# This is a data file for use with gnuplot.\n"
        "# The corresponding command file in this directory\n"
        f'# is called "{COMMAND_FILENAME}". Together these can be\n'
        "# used to generate a 3-d plot of the surface plate height.\n"
        "\n\n"
    ]
    for polyline in layout.lines:
        parts.append(f"# {polyline.name}.txt\n")
        parts.extend(f"{p.x:f} {p.y:f} {p.z:f}\n" for p in polyline.points)
        parts.append("\n\n")
    return "".join(parts)


def write_gnuplot_files(
    layout: PlateLayout, units: Units, out_dir: Path
) -> tuple[Path, Path]:
    """Write both gnuplot files into out_dir and return their paths."""
    out_dir.mkdir(parents=True, exist_ok=True)
    command_path: Path = out_dir / COMMAND_FILENAME
    data_path: Path = out_dir / DATA_FILENAME
    command_path.write_text(render_gnuplot_command(layout, units), encoding="utf-8")
    data_path.write_text(render_gnuplot_data(layout), encoding="utf-8")
    return command_path, data_path
