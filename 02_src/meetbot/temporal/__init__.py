"""Temporal resolution module."""

from .resolver import TemporalResolver

__all__ = ["TemporalResolver"]
