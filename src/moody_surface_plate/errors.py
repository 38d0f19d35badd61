"""
Fatal input errors for the surface plate analysis.
All of these are raised while the inputs are being materialized, before any
worksheet column is computed.
"""

from __future__ import annotations


class PlateInputError(ValueError):
    """Base class for inputs that make a run impossible."""


class InsufficientData(PlateInputError):
    """A line has fewer than 3 valid readings."""


class CapacityExceeded(PlateInputError):
    """A line has more stations than the configured cap."""


class MalformedInput(PlateInputError):
    """A value or declaration could not be parsed."""
