"""
Services Package

Contains business logic and service layer components.
"""

from .game_service import DailyGameService, get_game_service, initialize_game_service
from .catalog_service import load_catalog, parse_catalog, CatalogError, EmptyCatalogError
from .storage import create_storage_factory, StorageError

__all__ = [
    'DailyGameService', 'get_game_service', 'initialize_game_service',
    'load_catalog', 'parse_catalog', 'CatalogError', 'EmptyCatalogError',
    'create_storage_factory', 'StorageError'
]
