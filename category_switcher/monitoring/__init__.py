"""Snapshot source for running applications."""

from .app_monitor import list_running_applications, parse_app_listing

__all__ = [
    'list_running_applications',
    'parse_app_listing',
]
