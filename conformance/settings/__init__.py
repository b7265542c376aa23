"""Environment configuration for the conformance suite."""

from .app import AppSettings, get_settings


__all__ = ["AppSettings", "get_settings"]
