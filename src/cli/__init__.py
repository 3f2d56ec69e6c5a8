"""
UX Auditor CLI.

Provides the ``ux-audit`` command, which runs an audit, writes the JSON
artifacts and optionally applies the CI threshold gate.
"""

from .app import main

__all__ = ["main"]
