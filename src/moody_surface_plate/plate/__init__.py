"""Line registry public API."""

# Re-export the stable interfaces so imports stay clean.

from .lines import (  # Re-export registry pieces from the lines module.
    ARCSEC_RAD,  # Share the arc-second to radian constant.
    LINES,  # Share the eight lines in processing order.
    LINES_BY_NAME,  # Share the name lookup table.
    Line,  # Share the line dataclass.
    LineRole,  # Share the role enum.
    get_line,  # Share the name resolver.
    lines_with_role,  # Share the role filter.
    mid_value,  # Share the middle-value helper.
)

__all__ = [  # Define the public symbols for this package.
    "ARCSEC_RAD",  # Arc-seconds to radians.
    "LINES",  # All eight lines.
    "LINES_BY_NAME",  # Name lookup.
    "Line",  # Line metadata dataclass.
    "LineRole",  # Diagonal / perimeter / center.
    "get_line",  # Resolve a name to a Line.
    "lines_with_role",  # Lines of one role.
    "mid_value",  # Middle value of a column.
]
