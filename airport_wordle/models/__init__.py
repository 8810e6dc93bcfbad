"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameState, GameStatus, GameView, LetterStatus

__all__ = ['GameState', 'GameStatus', 'GameView', 'LetterStatus']
