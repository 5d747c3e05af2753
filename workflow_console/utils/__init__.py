"""Utility modules for the workflow console."""

from .datetime_utils import parse_iso, seconds_between

__all__ = ["parse_iso", "seconds_between"]
