"""
Console output for batch runs.
"""

from .rich_ui import ConsoleReporter

__all__ = ["ConsoleReporter"]
