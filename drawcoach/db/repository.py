"""Data access layer for practice attempts."""

import logging
import sqlite3
import uuid
from datetime import datetime
from typing import Optional

from drawcoach.practice.scenario import Decision, Scenario

from .models import AttemptMetadata, AttemptRecord

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id", "timestamp", "hole_cards", "board_cards", "pot_amount", "call_amount",
    "outs", "equity", "pot_odds", "correct_decision", "description",
    "out_cards_primary", "out_cards_secondary", "out_cards_total",
    "out_breakdown", "draw_type", "user_decision", "is_correct",
    "time_to_decision", "session_id", "confidence_level", "notes",
    "platform", "app_version",
)


class AttemptRepository:
    """Repository for storing and querying practice attempts."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize repository with database connection.

        Args:
            conn: SQLite connection with the attempt schema created
        """
        self.conn = conn

    def record_attempt(
        self,
        scenario: Scenario,
        user_decision: Decision,
        is_correct: Optional[bool] = None,
        time_to_decision: Optional[int] = None,
        metadata: Optional[AttemptMetadata] = None,
        timestamp: Optional[datetime] = None,
    ) -> str:
        """
        Store an answered scenario.

        Args:
            scenario: Scenario that was shown
            user_decision: The user's answer
            is_correct: Override; defaults to comparing with the scenario
            time_to_decision: Milliseconds taken to answer
            metadata: Optional session/confidence/notes data
            timestamp: When the attempt was made (defaults to now)

        Returns:
            Attempt id
        """
        if is_correct is None:
            is_correct = scenario.is_correct(user_decision)
        metadata = metadata or AttemptMetadata()
        attempt_id = str(uuid.uuid4())

        row = {
            "id": attempt_id,
            "timestamp": (timestamp or datetime.now()).isoformat(),
            **scenario.to_record(),
            "user_decision": user_decision.value,
            "is_correct": is_correct,
            "time_to_decision": time_to_decision,
            "session_id": metadata.session_id,
            "confidence_level": metadata.confidence_level,
            "notes": metadata.notes,
            "platform": metadata.platform,
            "app_version": metadata.app_version,
        }

        placeholders = ", ".join("?" for _ in _COLUMNS)
        try:
            self.conn.execute(
                f"INSERT INTO call_practice_attempts ({', '.join(_COLUMNS)}) "
                f"VALUES ({placeholders})",
                tuple(row[c] for c in _COLUMNS),
            )
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise

        logger.debug("Recorded attempt %s", attempt_id)
        return attempt_id

    def _row_to_attempt(self, row: sqlite3.Row) -> AttemptRecord:
        """Convert a database row to AttemptRecord."""
        return AttemptRecord(
            id=row["id"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            scenario=Scenario.from_record(row),
            user_decision=Decision(row["user_decision"]),
            is_correct=bool(row["is_correct"]),
            time_to_decision=row["time_to_decision"],
            metadata=AttemptMetadata(
                session_id=row["session_id"],
                confidence_level=row["confidence_level"],
                notes=row["notes"],
                platform=row["platform"],
                app_version=row["app_version"],
            ),
        )

    def get_attempt(self, attempt_id: str) -> Optional[AttemptRecord]:
        """
        Retrieve an attempt by id.

        Returns:
            AttemptRecord or None if not found
        """
        cursor = self.conn.execute(
            "SELECT * FROM call_practice_attempts WHERE id = ?", (attempt_id,)
        )
        row = cursor.fetchone()
        if not row:
            return None
        return self._row_to_attempt(row)

    def get_attempts(
        self,
        session_id: Optional[str] = None,
        is_correct: Optional[bool] = None,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[AttemptRecord]:
        """
        Get attempts with optional filters, newest first.

        Args:
            session_id: Only attempts from this session
            is_correct: Only correct (True) or wrong (False) attempts
            since: Only attempts at or after this time
            limit: Maximum number of attempts

        Returns:
            List of AttemptRecord objects
        """
        query = "SELECT * FROM call_practice_attempts WHERE 1=1"
        params: list = []

        if session_id is not None:
            query += " AND session_id = ?"
            params.append(session_id)
        if is_correct is not None:
            query += " AND is_correct = ?"
            params.append(is_correct)
        if since is not None:
            query += " AND timestamp >= ?"
            params.append(since.isoformat())

        query += " ORDER BY timestamp DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        cursor = self.conn.execute(query, params)
        return [self._row_to_attempt(row) for row in cursor]

    def get_recent_attempts(self, limit: int = 10) -> list[AttemptRecord]:
        """Most recent attempts for history display."""
        return self.get_attempts(limit=limit)

    def count_attempts(self, is_correct: Optional[bool] = None) -> int:
        """Count stored attempts, optionally only correct or wrong ones."""
        if is_correct is None:
            cursor = self.conn.execute("SELECT COUNT(*) FROM call_practice_attempts")
        else:
            cursor = self.conn.execute(
                "SELECT COUNT(*) FROM call_practice_attempts WHERE is_correct = ?",
                (is_correct,),
            )
        return cursor.fetchone()[0]

    def clear_all(self) -> int:
        """
        Delete every attempt.

        Returns:
            Number of attempts deleted
        """
        cursor = self.conn.execute("DELETE FROM call_practice_attempts")
        self.conn.commit()
        logger.debug("Cleared %d attempts", cursor.rowcount)
        return cursor.rowcount
