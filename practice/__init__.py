"""Read-aloud scoring, practice statistics and scheduling."""
