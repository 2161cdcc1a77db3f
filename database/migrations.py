"""Database initialization and migrations."""

import logging
from pathlib import Path
from typing import Optional

import aiosqlite

import config
from data.passages import PASSAGES
from database.models import ALL_TABLES, CREATE_INDEXES

logger = logging.getLogger(__name__)


async def initialize_database(db_path: Optional[str] = None) -> str:
    """Initialize database with all tables and seed data.

    Returns the path of the initialized database.
    """
    db_path = db_path or config.DATABASE_PATH

    # Create data directory if it doesn't exist
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as db:
        # Create all tables
        for table_sql in ALL_TABLES:
            await db.execute(table_sql)

        # Create indexes
        for index_sql in CREATE_INDEXES:
            await db.execute(index_sql)

        # Seed the preset topic
        await db.execute(
            """
            INSERT OR IGNORE INTO topics (id, name, description, is_preset)
            VALUES (?, ?, ?, 1)
            """,
            (config.PRESET_TOPIC_ID, config.PRESET_TOPIC_NAME, config.PRESET_TOPIC_DESCRIPTION)
        )

        # Seed passages if not already present
        for passage in PASSAGES:
            await db.execute(
                """
                INSERT OR IGNORE INTO practice_items
                (id, title, content, difficulty, category, topic_id)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    passage['id'],
                    passage['title'],
                    passage['content'],
                    passage['difficulty'],
                    passage['category'],
                    config.PRESET_TOPIC_ID
                )
            )

        await db.commit()

    logger.info("Database initialized at %s", db_path)
    return db_path
