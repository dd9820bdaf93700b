"""
Kelly Pool - Scorekeeper for the Kelly Pool billiards game.

Players are dealt secret balls, take turns pocketing, and the engine
resolves finishes, 8-ball wins and scratches. The package provides:
- An immutable game state and a pure reducer
- Ephemeral table sessions
- A REST API and a terminal scorekeeper
"""

__version__ = "0.1.0"
