"""
SQLite Store: Infrastructure adapter for the local record store.

Implements ReviewRepository and SessionRepository on top of a single SQLite
file. Timestamps are stored as ISO-8601 text so they sort chronologically.
"""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path

from lexirecall.domain.models import ReviewRecord, SessionSummary
from lexirecall.domain.ports import ReviewRepository, SessionRepository

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS review_records (
    item_id TEXT PRIMARY KEY,
    review_count INTEGER NOT NULL DEFAULT 0,
    correct_count INTEGER NOT NULL DEFAULT 0,
    memory_strength REAL NOT NULL DEFAULT 0,
    difficulty INTEGER NOT NULL DEFAULT 3,
    next_review_interval_days INTEGER NOT NULL DEFAULT 1,
    last_review_at TEXT,
    next_review_at TEXT
);
CREATE INDEX IF NOT EXISTS idx_review_records_due ON review_records (next_review_at);
CREATE TABLE IF NOT EXISTS study_sessions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    session_date TEXT NOT NULL,
    start_time TEXT NOT NULL,
    end_time TEXT,
    words_studied INTEGER NOT NULL DEFAULT 0,
    correct_answers INTEGER NOT NULL DEFAULT 0,
    total_answers INTEGER NOT NULL DEFAULT 0,
    session_type TEXT NOT NULL
);
"""

RECORD_COLUMNS = (
    "item_id, review_count, correct_count, memory_strength, difficulty, "
    "next_review_interval_days, last_review_at, next_review_at"
)


def _ts(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="microseconds")


def _parse_ts(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _row_to_record(row: sqlite3.Row) -> ReviewRecord:
    return ReviewRecord(
        item_id=row["item_id"],
        review_count=row["review_count"],
        correct_count=row["correct_count"],
        memory_strength=row["memory_strength"],
        difficulty=row["difficulty"],
        next_review_interval_days=row["next_review_interval_days"],
        last_review_at=_parse_ts(row["last_review_at"]),
        next_review_at=_parse_ts(row["next_review_at"]),
    )


def _row_to_session(row: sqlite3.Row) -> SessionSummary:
    return SessionSummary(
        session_date=date.fromisoformat(row["session_date"]),
        start_time=datetime.fromisoformat(row["start_time"]),
        end_time=_parse_ts(row["end_time"]),
        words_studied=row["words_studied"],
        correct_answers=row["correct_answers"],
        total_answers=row["total_answers"],
        session_type=row["session_type"],
    )


class SqliteStore:
    """
    Context manager around one SQLite connection.

    Commits on clean exit, rolls back if the block raises.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.conn: sqlite3.Connection | None = None

    def __enter__(self) -> "SqliteStore":
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self.conn.executescript(SCHEMA)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn is None:
            return
        try:
            if exc_type is None:
                self.conn.commit()
            else:
                logger.warning(f"Rolling back {self.db_path}: {exc_val}")
                self.conn.rollback()
        finally:
            self.conn.close()
            self.conn = None

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        assert self.conn is not None, "SqliteStore used outside of a with block"
        return self.conn.execute(sql, params)


class SqliteReviewRepository(ReviewRepository):
    """
    Review records in a local SQLite database.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path

    async def get(self, item_id: str) -> ReviewRecord | None:
        with SqliteStore(self.db_path) as store:
            row = store.execute(
                f"SELECT {RECORD_COLUMNS} FROM review_records WHERE item_id = ?",
                (item_id,),
            ).fetchone()
        return _row_to_record(row) if row else None

    async def save(self, record: ReviewRecord) -> None:
        with SqliteStore(self.db_path) as store:
            store.execute(
                f"INSERT OR REPLACE INTO review_records ({RECORD_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    record.item_id,
                    record.review_count,
                    record.correct_count,
                    record.memory_strength,
                    record.difficulty,
                    record.next_review_interval_days,
                    _ts(record.last_review_at),
                    _ts(record.next_review_at),
                ),
            )

    async def list_due(self, now: datetime, limit: int) -> list[ReviewRecord]:
        with SqliteStore(self.db_path) as store:
            rows = store.execute(
                f"SELECT {RECORD_COLUMNS} FROM review_records "
                "WHERE next_review_at IS NOT NULL AND next_review_at <= ? "
                "ORDER BY memory_strength ASC, next_review_at ASC LIMIT ?",
                (_ts(now), max(0, limit)),
            ).fetchall()
        return [_row_to_record(r) for r in rows]

    async def list_all(self) -> list[ReviewRecord]:
        with SqliteStore(self.db_path) as store:
            rows = store.execute(
                f"SELECT {RECORD_COLUMNS} FROM review_records ORDER BY item_id"
            ).fetchall()
        return [_row_to_record(r) for r in rows]


class SqliteSessionRepository(SessionRepository):
    """
    Study session summaries in a local SQLite database.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path

    async def add(self, session: SessionSummary) -> None:
        with SqliteStore(self.db_path) as store:
            store.execute(
                "INSERT INTO study_sessions (session_date, start_time, end_time, "
                "words_studied, correct_answers, total_answers, session_type) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    session.session_date.isoformat(),
                    _ts(session.start_time),
                    _ts(session.end_time),
                    session.words_studied,
                    session.correct_answers,
                    session.total_answers,
                    session.session_type,
                ),
            )

    async def list_sessions(self) -> list[SessionSummary]:
        with SqliteStore(self.db_path) as store:
            rows = store.execute(
                "SELECT session_date, start_time, end_time, words_studied, "
                "correct_answers, total_answers, session_type "
                "FROM study_sessions ORDER BY start_time ASC"
            ).fetchall()
        return [_row_to_session(r) for r in rows]
