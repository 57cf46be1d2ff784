"""SQLite schema definitions for practice attempt storage."""

import sqlite3
from pathlib import Path
from typing import Optional

# Schema version for migrations
SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Attempts table: one row per answered scenario
CREATE TABLE IF NOT EXISTS call_practice_attempts (
    id TEXT PRIMARY KEY,                    -- uuid4
    timestamp DATETIME NOT NULL,
    hole_cards TEXT NOT NULL,               -- JSON list of {rank, suit}
    board_cards TEXT NOT NULL,              -- JSON list of {rank, suit}
    pot_amount REAL NOT NULL,
    call_amount REAL NOT NULL,
    outs INTEGER NOT NULL,
    equity REAL NOT NULL,
    pot_odds REAL NOT NULL,                 -- Percentage convention
    correct_decision TEXT NOT NULL,         -- call, fold
    description TEXT NOT NULL,
    out_cards_primary TEXT NOT NULL,
    out_cards_secondary TEXT NOT NULL,
    out_cards_total TEXT NOT NULL,
    out_breakdown TEXT NOT NULL,            -- JSON object
    draw_type TEXT,
    user_decision TEXT NOT NULL,            -- call, fold
    is_correct BOOLEAN NOT NULL,
    time_to_decision INTEGER,               -- Milliseconds
    session_id TEXT,
    confidence_level INTEGER,               -- 1-5
    notes TEXT,
    platform TEXT,
    app_version TEXT
);

CREATE INDEX IF NOT EXISTS idx_attempts_timestamp ON call_practice_attempts(timestamp);
CREATE INDEX IF NOT EXISTS idx_attempts_session ON call_practice_attempts(session_id);
CREATE INDEX IF NOT EXISTS idx_attempts_correct ON call_practice_attempts(is_correct);

-- Schema version tracking
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY
);
"""


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """
    Get a database connection.

    Args:
        db_path: Path to SQLite database file, or ":memory:"

    Returns:
        SQLite connection object
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    if str(db_path) != ":memory:":
        conn.execute("PRAGMA journal_mode = WAL")
        conn.execute("PRAGMA synchronous = NORMAL")
    return conn


def create_database(db_path: str | Path, force: bool = False) -> sqlite3.Connection:
    """
    Create the database schema.

    Args:
        db_path: Path to SQLite database file, or ":memory:"
        force: If True, drop existing tables and recreate

    Returns:
        SQLite connection object
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)

    if force:
        conn.executescript("""
            DROP TABLE IF EXISTS call_practice_attempts;
            DROP TABLE IF EXISTS schema_version;
        """)

    conn.executescript(SCHEMA_SQL)

    conn.execute(
        "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
        (SCHEMA_VERSION,)
    )

    conn.commit()
    return conn


def get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    """Get the current schema version."""
    try:
        cursor = conn.execute("SELECT version FROM schema_version LIMIT 1")
        row = cursor.fetchone()
        return row[0] if row else None
    except sqlite3.OperationalError:
        return None
