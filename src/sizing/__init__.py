"""Position sizing module for fixed-fractional risk control."""

from src.sizing.models import AccountParameters, SizingCheck, SizingResult
from src.sizing.position_sizer import PositionSizer

__all__ = ["AccountParameters", "PositionSizer", "SizingCheck", "SizingResult"]
