"""
Command Line Interface for pynoisey

Available Commands:
- render (pnz-render): Sample a generator from a noise JSON document to PNG, NPY or ASCII
"""

from .render_commands import render

__all__ = ["render"]
