"""
cube4 - 3D four-in-a-row game engine

This package provides the game state and win detection for a four-in-a-row
game played on a cubic grid, the claw that selects where pieces drop, and a
terminal interface for playing it.
"""

# Version number
__version__ = '0.1.0'
