"""
TUI Screens for Fog of Secrets
"""
from .loading import LoadingScreen
from .map import MapScreen
from .components import MapGrid, PlayerList, render_cell, player_status

__all__ = [
    'LoadingScreen',
    'MapScreen',
    'MapGrid',
    'PlayerList',
    'render_cell',
    'player_status',
]
