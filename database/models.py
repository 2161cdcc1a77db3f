"""Database models and schemas."""

# SQL schemas for all tables

CREATE_TOPICS_TABLE = """
CREATE TABLE IF NOT EXISTS topics (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT DEFAULT '',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    is_preset INTEGER DEFAULT 0
);
"""

CREATE_PRACTICE_ITEMS_TABLE = """
CREATE TABLE IF NOT EXISTS practice_items (
    id INTEGER PRIMARY KEY,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    difficulty INTEGER DEFAULT 1,
    category TEXT DEFAULT 'General',
    mp3_url TEXT DEFAULT '',
    topic_id INTEGER NOT NULL,
    FOREIGN KEY (topic_id) REFERENCES topics(id)
);
"""

CREATE_RECORDINGS_TABLE = """
CREATE TABLE IF NOT EXISTS recordings (
    id TEXT PRIMARY KEY,
    practice_item_id INTEGER NOT NULL,
    recorded_at TIMESTAMP NOT NULL,
    duration REAL DEFAULT 0,
    file_path TEXT NOT NULL,
    note TEXT,
    FOREIGN KEY (practice_item_id) REFERENCES practice_items(id)
);
"""

CREATE_SPEECH_SCORES_TABLE = """
CREATE TABLE IF NOT EXISTS speech_scores (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    recording_id TEXT NOT NULL,
    transcribed_text TEXT NOT NULL,
    match_score REAL NOT NULL,
    mismatched_words TEXT DEFAULT '[]',
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (recording_id) REFERENCES recordings(id)
);
"""

# Indexes for performance
CREATE_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_items_topic ON practice_items(topic_id);",
    "CREATE INDEX IF NOT EXISTS idx_recordings_item ON recordings(practice_item_id);",
    "CREATE INDEX IF NOT EXISTS idx_recordings_time ON recordings(recorded_at DESC);",
    "CREATE INDEX IF NOT EXISTS idx_scores_recording ON speech_scores(recording_id);",
]

ALL_TABLES = [
    CREATE_TOPICS_TABLE,
    CREATE_PRACTICE_ITEMS_TABLE,
    CREATE_RECORDINGS_TABLE,
    CREATE_SPEECH_SCORES_TABLE,
]
