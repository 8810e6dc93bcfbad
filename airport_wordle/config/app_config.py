"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

from .game_settings import DEFAULT_CATALOG_PATH, MAX_GUESSES

# Load environment variables from config.env
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Catalog Settings (local path or http(s) URL)
    CATALOG_SOURCE = os.getenv('CATALOG_SOURCE', DEFAULT_CATALOG_PATH)
    CATALOG_TIMEOUT_SECONDS = int(os.getenv('CATALOG_TIMEOUT_SECONDS', 30))

    # Game Settings
    PUZZLE_EPOCH = os.getenv('PUZZLE_EPOCH', '2025-01-01')
    MAX_GUESSES = int(os.getenv('MAX_GUESSES', MAX_GUESSES))

    # Storage Settings: "memory", "file" or "mongo"
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'file')
    STORAGE_DIR = os.getenv('STORAGE_DIR', 'data/players')
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB = os.getenv('MONGO_DB', 'airport_wordle')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'mongo')


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'testing-secret-key'
    STORAGE_BACKEND = 'memory'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
