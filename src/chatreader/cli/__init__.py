"""
Command-line interface for chat backup processing.
"""

from .main import main

__all__ = ['main']
