"""
cube4.interfaces - User interfaces for cube4

This package contains the input event mapping and the command-line
interface for playing the game.
"""

# Don't import anything here to avoid circular imports
__all__ = []
