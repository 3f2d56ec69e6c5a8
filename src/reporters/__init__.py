"""Report output: JSON files and rich console summaries."""

from src.reporters.json_reporter import JsonReporter
from src.reporters.console_reporter import ConsoleReporter

__all__ = ["JsonReporter", "ConsoleReporter"]
