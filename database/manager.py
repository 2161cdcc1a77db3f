"""Database operations manager."""

import json
import logging
import random
import uuid
from collections import defaultdict
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import aiosqlite

import config
from practice.contributions import build_grid, default_range
from practice.errors import DatabaseError, PresetTopicError, TopicImportError
from practice.models import (
    ContributionWeek,
    DailyPractices,
    DailySelection,
    PracticeItem,
    PracticeStats,
    Recording,
    ScoreRecord,
    Span,
    Topic,
)
from practice.scheduler import plan_daily_practice
from practice.stats import aggregate, group_practice_history

logger = logging.getLogger(__name__)

ITEM_COLUMNS = "p.id, p.title, p.content, p.topic_id, p.difficulty, p.category, p.mp3_url"


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def _item_from_row(row, is_read: bool = False) -> PracticeItem:
    return PracticeItem(
        id=row[0],
        title=row[1],
        content=row[2],
        topic_id=row[3],
        difficulty=row[4] if row[4] is not None else 1,
        category=row[5] or "General",
        mp3_url=row[6] or "",
        is_read=is_read,
    )


def _recording_from_row(row) -> Recording:
    return Recording(
        id=row[0],
        item_id=row[1],
        recorded_at=_parse_timestamp(row[2]),
        duration=row[3] or 0.0,
        file_path=row[4],
        note=row[5],
    )


class DatabaseManager:
    """Manages all database operations.

    Callers create one manager per database file and pass it to whatever
    needs it; there is no module-level instance.
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or config.DATABASE_PATH

    def _connect(self) -> aiosqlite.Connection:
        """Open a database connection (use with ``async with``)."""
        return aiosqlite.connect(self.db_path)

    # Topic operations
    async def create_topic(self, name: str, description: str = "") -> int:
        """Create a topic and return its id."""
        async with self._connect() as db:
            topic_id = await self._insert_topic(db, name, description)
            await db.commit()
        return topic_id

    async def _insert_topic(self, db: aiosqlite.Connection, name: str, description: str) -> int:
        cursor = await db.execute(
            "INSERT INTO topics (name, description) VALUES (?, ?)",
            (name, description)
        )
        return cursor.lastrowid

    async def load_topics(self) -> List[Topic]:
        """Get all topics with their item counts, newest first."""
        async with self._connect() as db:
            async with db.execute(
                """
                SELECT t.id, t.name, t.description, t.created_at, t.is_preset,
                       COUNT(DISTINCT p.id) AS practice_count
                FROM topics t
                LEFT JOIN practice_items p ON t.id = p.topic_id
                GROUP BY t.id
                ORDER BY t.created_at DESC, t.id DESC
                """
            ) as cursor:
                topics = []
                async for row in cursor:
                    topics.append(Topic(
                        id=row[0],
                        name=row[1],
                        description=row[2] or "",
                        created_at=_parse_timestamp(row[3]),
                        is_preset=bool(row[4]),
                        practice_count=row[5],
                    ))
                return topics

    async def import_topic_json(self, json_path: str, topic_name: str, description: str = "") -> int:
        """
        Import a JSON array of practice items into a new topic.

        Each entry needs ``title`` and ``content``; ``difficulty``, ``category``
        and ``mp3_url`` are optional. Item ids continue from the current
        maximum. Nothing is written if any entry fails.

        Returns:
            The new topic id
        """
        try:
            entries = json.loads(Path(json_path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise TopicImportError(f"Cannot read {json_path}: {e}") from e

        if not isinstance(entries, list):
            raise TopicImportError(f"{json_path} must contain a JSON array of items")

        async with self._connect() as db:
            try:
                topic_id = await self._insert_topic(db, topic_name, description)

                async with db.execute("SELECT COALESCE(MAX(id), 0) FROM practice_items") as cursor:
                    max_id = (await cursor.fetchone())[0]

                for index, entry in enumerate(entries):
                    if not isinstance(entry, dict) or 'title' not in entry or 'content' not in entry:
                        raise TopicImportError(f"Item {index} is missing 'title' or 'content'")
                    await db.execute(
                        """
                        INSERT INTO practice_items
                        (id, title, content, difficulty, category, mp3_url, topic_id)
                        VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            max_id + index + 1,
                            entry['title'],
                            entry['content'],
                            entry.get('difficulty', 1),
                            entry.get('category', "Custom"),
                            entry.get('mp3_url', ""),
                            topic_id
                        )
                    )

                await db.commit()
            except Exception:
                await db.rollback()
                raise

        logger.info("Imported %d items into topic %r (id %d)", len(entries), topic_name, topic_id)
        return topic_id

    async def delete_topic(self, topic_id: int):
        """Delete a topic with its items, recordings, scores and audio files."""
        async with self._connect() as db:
            async with db.execute("SELECT is_preset FROM topics WHERE id = ?", (topic_id,)) as cursor:
                row = await cursor.fetchone()
            if row is None:
                raise DatabaseError(f"Topic {topic_id} does not exist")
            if row[0]:
                raise PresetTopicError("Preset topics cannot be deleted")

            async with db.execute(
                """
                SELECT r.file_path FROM recordings r
                INNER JOIN practice_items p ON r.practice_item_id = p.id
                WHERE p.topic_id = ?
                """,
                (topic_id,)
            ) as cursor:
                file_paths = [r[0] async for r in cursor]

            try:
                await db.execute(
                    """
                    DELETE FROM speech_scores WHERE recording_id IN (
                        SELECT r.id FROM recordings r
                        INNER JOIN practice_items p ON r.practice_item_id = p.id
                        WHERE p.topic_id = ?
                    )
                    """,
                    (topic_id,)
                )
                await db.execute(
                    """
                    DELETE FROM recordings WHERE practice_item_id IN (
                        SELECT id FROM practice_items WHERE topic_id = ?
                    )
                    """,
                    (topic_id,)
                )
                await db.execute("DELETE FROM practice_items WHERE topic_id = ?", (topic_id,))
                await db.execute("DELETE FROM topics WHERE id = ?", (topic_id,))
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        for file_path in file_paths:
            Path(file_path).unlink(missing_ok=True)

        logger.info("Deleted topic %d and %d recordings", topic_id, len(file_paths))

    # Practice item operations
    async def load_practice_items(self, topic_id: Optional[int] = None) -> List[PracticeItem]:
        """Get practice items (optionally of one topic), read status included."""
        query = f"""
            SELECT {ITEM_COLUMNS}, COUNT(r.id) AS recording_count
            FROM practice_items p
            LEFT JOIN recordings r ON p.id = r.practice_item_id
        """
        params: Tuple = ()
        if topic_id is not None:
            query += " WHERE p.topic_id = ?"
            params = (topic_id,)
        query += " GROUP BY p.id ORDER BY p.id"

        async with self._connect() as db:
            async with db.execute(query, params) as cursor:
                return [_item_from_row(row, is_read=row[7] > 0) async for row in cursor]

    async def get_practice_item(self, item_id: int) -> Optional[PracticeItem]:
        """Get a practice item by its ID."""
        async with self._connect() as db:
            async with db.execute(
                f"""
                SELECT {ITEM_COLUMNS},
                       EXISTS (SELECT 1 FROM recordings r WHERE r.practice_item_id = p.id)
                FROM practice_items p
                WHERE p.id = ?
                """,
                (item_id,)
            ) as cursor:
                row = await cursor.fetchone()
                return _item_from_row(row, is_read=bool(row[7])) if row else None

    # Recording operations
    async def save_recording(
        self,
        item_id: int,
        file_path: str,
        recorded_at: Optional[datetime] = None,
        duration: float = 0.0,
        note: Optional[str] = None
    ) -> Recording:
        """Save a recording to the database."""
        recording = Recording(
            id=str(uuid.uuid4()),
            item_id=item_id,
            recorded_at=recorded_at or datetime.now(),
            duration=duration,
            file_path=file_path,
            note=note,
        )

        async with self._connect() as db:
            await db.execute(
                """
                INSERT INTO recordings
                (id, practice_item_id, recorded_at, duration, file_path, note)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    recording.id, recording.item_id, recording.recorded_at.isoformat(),
                    recording.duration, recording.file_path, recording.note
                )
            )
            await db.commit()

        return recording

    async def load_recordings(self, item_id: Optional[int] = None) -> List[Recording]:
        """Get recordings (optionally of one item), newest first."""
        query = "SELECT id, practice_item_id, recorded_at, duration, file_path, note FROM recordings"
        params: Tuple = ()
        if item_id is not None:
            query += " WHERE practice_item_id = ?"
            params = (item_id,)
        query += " ORDER BY recorded_at DESC"

        async with self._connect() as db:
            async with db.execute(query, params) as cursor:
                return [_recording_from_row(row) async for row in cursor]

    async def delete_recording(self, recording: Recording):
        """Delete a recording's audio file, its row and its scores."""
        Path(recording.file_path).unlink(missing_ok=True)

        async with self._connect() as db:
            await db.execute("DELETE FROM speech_scores WHERE recording_id = ?", (recording.id,))
            await db.execute("DELETE FROM recordings WHERE id = ?", (recording.id,))
            await db.commit()

    async def load_latest_recording_times(self) -> Dict[int, datetime]:
        """Get the latest recording time per practice item."""
        async with self._connect() as db:
            async with db.execute(
                """
                SELECT practice_item_id, MAX(recorded_at)
                FROM recordings
                GROUP BY practice_item_id
                """
            ) as cursor:
                return {row[0]: _parse_timestamp(row[1]) async for row in cursor}

    # Score operations
    async def save_score(self, score: ScoreRecord):
        """Save a score record."""
        mismatches = json.dumps([span.to_dict() for span in score.mismatched_words], ensure_ascii=False)
        async with self._connect() as db:
            await db.execute(
                """
                INSERT INTO speech_scores
                (recording_id, transcribed_text, match_score, mismatched_words)
                VALUES (?, ?, ?, ?)
                """,
                (score.recording_id, score.transcribed_text, score.match_score, mismatches)
            )
            await db.commit()

    async def load_score(self, recording_id: str) -> Optional[ScoreRecord]:
        """Get the latest score of a recording."""
        async with self._connect() as db:
            async with db.execute(
                """
                SELECT transcribed_text, match_score, mismatched_words
                FROM speech_scores
                WHERE recording_id = ?
                ORDER BY id DESC
                LIMIT 1
                """,
                (recording_id,)
            ) as cursor:
                row = await cursor.fetchone()
                if not row:
                    return None
                return ScoreRecord(
                    recording_id=recording_id,
                    transcribed_text=row[0],
                    match_score=row[1],
                    mismatched_words=tuple(Span.from_dict(d) for d in json.loads(row[2] or "[]")),
                )

    # Aggregated views
    async def _load_scored_recordings(
        self,
        topic_id: Optional[int] = None
    ) -> List[Tuple[str, int, datetime, Optional[float]]]:
        """One row per (recording, score); unscored recordings have score None."""
        query = """
            SELECT r.id, r.practice_item_id, r.recorded_at, s.match_score
            FROM recordings r
            LEFT JOIN speech_scores s ON r.id = s.recording_id
        """
        params: Tuple = ()
        if topic_id is not None:
            query += " WHERE r.practice_item_id IN (SELECT id FROM practice_items WHERE topic_id = ?)"
            params = (topic_id,)

        async with self._connect() as db:
            async with db.execute(query, params) as cursor:
                return [(row[0], row[1], _parse_timestamp(row[2]), row[3]) async for row in cursor]

    async def load_practice_stats(self, topic_id: Optional[int] = None) -> Dict[int, PracticeStats]:
        """Get practice count and best score for every item."""
        items = await self.load_practice_items(topic_id)
        rows = await self._load_scored_recordings(topic_id)
        return aggregate(
            ((item_id, score) for _, item_id, _, score in rows),
            item_ids=[item.id for item in items],
        )

    async def load_today_item(self, today: date, rng: random.Random) -> DailySelection:
        """Get today's practice item, picking one if none was practised today."""
        items = await self.load_practice_items()
        recordings_today: Dict[int, List[datetime]] = defaultdict(list)
        for recording in await self.load_recordings():
            if recording.recorded_at.date() == today:
                recordings_today[recording.item_id].append(recording.recorded_at)
        return plan_daily_practice(items, recordings_today, rng)

    async def load_practice_history(self) -> List[DailyPractices]:
        """Get practised items grouped by day, newest first."""
        items = await self.load_practice_items()
        recordings = await self.load_recordings()
        return group_practice_history(items, recordings)

    async def load_contributions(
        self,
        today: date,
        months: int = config.CONTRIBUTION_MONTHS
    ) -> List[ContributionWeek]:
        """Build the contribution heatmap for the last ``months`` months."""
        start, end = default_range(today, months)

        best_by_recording: Dict[str, Optional[float]] = {}
        day_by_recording: Dict[str, date] = {}
        for recording_id, _, recorded_at, score in await self._load_scored_recordings():
            day_by_recording[recording_id] = recorded_at.date()
            current = best_by_recording.get(recording_id)
            if score is not None and (current is None or score > current):
                best_by_recording[recording_id] = score
            else:
                best_by_recording.setdefault(recording_id, None)

        daily_count: Dict[date, int] = defaultdict(int)
        daily_best: Dict[date, int] = {}
        for recording_id, day in day_by_recording.items():
            daily_count[day] += 1
            score = best_by_recording[recording_id]
            if score is not None:
                daily_best[day] = max(daily_best.get(day, 0), int(score * 100))

        return build_grid(start, end, daily_best, daily_count)
