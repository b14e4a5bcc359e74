# src/jquery_builder/meta.py

"""Centralized program identity constants for jQuery Builder."""

from typing import NamedTuple

_BASE = "jquery-builder"

# CLI script name (the console_scripts entrypoint)
PROGRAM_SCRIPT = _BASE

# Human-readable name for banners, help text, etc.
PROGRAM_DISPLAY = _BASE.replace("-", " ").title().replace("Jquery", "jQuery")

# Python package / import name
PROGRAM_PACKAGE = _BASE.replace("-", "_")

# Environment variable prefix (used for JQUERY_BUILDER_LOG_LEVEL, etc.)
PROGRAM_ENV = _BASE.replace("-", "_").upper()

# Short tagline or description for help screens and metadata
DESCRIPTION = "Assemble jQuery's AMD sources into full and slim bundles."


class Metadata(NamedTuple):
    version: str
    commit: str
