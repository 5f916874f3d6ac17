"""CLI module for worldraster.

Provides grid planning and point mapping commands.
"""

from __future__ import annotations

from worldraster.cli.main import app

__all__ = ["app"]
