import os
import tempfile
from datetime import datetime, timezone

# Keep test logs out of the working tree; must run before the package is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='airport_wordle_logs_'))

import pytest

from airport_wordle import create_app
from airport_wordle.config import TestingConfig
from airport_wordle.services.game_service import initialize_game_service
from airport_wordle.services.storage import memory_storage_factory
from airport_wordle.utils.clock import FixedClock

CATALOG = ["SFO", "LAX", "JFK", "SEA", "ORD", "ATL", "BOS", "DEN", "MIA", "PHX"]


@pytest.fixture
def catalog():
    return list(CATALOG)


@pytest.fixture
def clock():
    # 2025-01-01 is day 0, so the solution is SFO
    return FixedClock(datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def game_service(catalog, clock):
    return initialize_game_service(catalog, memory_storage_factory(), clock)


@pytest.fixture
def app(game_service):
    app, socketio = create_app(TestingConfig)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
