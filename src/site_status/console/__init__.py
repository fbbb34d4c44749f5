"""
Rich console output package for the site status monitor.

This package provides console output using the Rich library: startup
banner, progress tracking, and themed success and error messages.
"""

from .output import ConsoleManager
from .progress import ProgressTracker
from .themes import get_theme, STATUS_COLORS, ICONS

__all__ = [
    'ConsoleManager',
    'ProgressTracker',
    'get_theme',
    'STATUS_COLORS',
    'ICONS',
]
