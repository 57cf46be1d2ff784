"""Data models for stored practice attempts."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from drawcoach.practice.scenario import Decision, Scenario


@dataclass
class AttemptMetadata:
    """Optional context recorded with an attempt."""
    session_id: Optional[str] = None
    confidence_level: Optional[int] = None  # 1-5
    notes: Optional[str] = None
    platform: Optional[str] = None
    app_version: Optional[str] = None


@dataclass
class AttemptRecord:
    """A user's answer to one practice scenario."""
    id: str
    timestamp: datetime
    scenario: Scenario
    user_decision: Decision
    is_correct: bool
    time_to_decision: Optional[int] = None  # Milliseconds
    metadata: AttemptMetadata = field(default_factory=AttemptMetadata)

    def __repr__(self) -> str:
        verdict = "correct" if self.is_correct else "wrong"
        return f"AttemptRecord({self.id[:8]}, {self.user_decision}, {verdict})"
