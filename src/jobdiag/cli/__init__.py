"""
Command-line interface for the jobdiag package.

This module provides the main CLI entry point for the diagnosis tool.
"""

from .main import main, main_cli

__all__ = [
    "main",
    "main_cli",
]
