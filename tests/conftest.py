"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path

from drawcoach.game.cards import make_rng, parse_cards, remaining_cards
from drawcoach.db.schema import create_database


@pytest.fixture
def rng():
    """Seeded random source for repeatable runs."""
    return make_rng(1234)


@pytest.fixture
def flush_draw():
    """A♥K♥ on J♥7♥2♦ with the 47 unseen cards."""
    hole = parse_cards("AhKh")
    board = parse_cards("Jh7h2d")
    return hole, board, remaining_cards(hole + board)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    conn = create_database(db_path)
    yield conn, db_path

    conn.close()
    for suffix in ("", "-wal", "-shm"):
        path = Path(str(db_path) + suffix)
        if path.exists():
            path.unlink()
