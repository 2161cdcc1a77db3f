"""Configuration constants for SpeakEasy."""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Storage
DATABASE_PATH = os.getenv("DATABASE_PATH", "./data/speakeasy.db")

# Transcription
WHISPER_MODEL = os.getenv("WHISPER_MODEL", "base")
WHISPER_LANGUAGE = os.getenv("WHISPER_LANGUAGE", "zh")
WHISPER_SAMPLE_RATE = 16000

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Score bands (match score 0.0-1.0)
GOOD_SCORE = 0.8
FAIR_SCORE = 0.6

# Contribution heatmap intensity thresholds (best score in percent: intensity)
INTENSITY_THRESHOLDS = [
    (60, 1),
    (75, 2),
    (85, 3),
]
MAX_INTENSITY = 4
CONTRIBUTION_MONTHS = 8  # heatmap window

# Practice list
RECENT_ITEMS_LIMIT = 10

# Preset topic seeded on first run
PRESET_TOPIC_ID = 1
PRESET_TOPIC_NAME = "得到60"
PRESET_TOPIC_DESCRIPTION = "得到专栏60秒音频文章"
