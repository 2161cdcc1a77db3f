"""Exception types for SpeakEasy."""


class SpeakEasyError(Exception):
    """Base class for all SpeakEasy errors."""


class DatabaseError(SpeakEasyError):
    """Raised when a storage operation cannot be completed."""


class TopicImportError(DatabaseError):
    """Raised when a topic JSON file cannot be imported."""


class PresetTopicError(DatabaseError):
    """Raised when trying to delete a preset topic."""


class TranscriptionError(SpeakEasyError):
    """Raised when an audio file cannot be transcribed."""
