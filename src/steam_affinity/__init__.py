"""
Steam Affinity - CPU affinity launcher setup for Steam games.

Writes a launcher batch file that pins a game to chosen CPUs and points
the game's Steam launch options at it by editing localconfig.vdf.
"""

__version__ = "0.1.0"
__author__ = "derbe"
