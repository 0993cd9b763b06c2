"""Utility modules for the roadmap service."""

from .periodic import PeriodicTask

__all__ = ["PeriodicTask"]
