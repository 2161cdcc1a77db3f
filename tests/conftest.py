import asyncio
import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so the top-level packages import
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from database.manager import DatabaseManager  # noqa: E402
from database.migrations import initialize_database  # noqa: E402
from practice.models import PracticeItem  # noqa: E402


@pytest.fixture
def items() -> list:
    """Three practice items A, B, C."""
    return [
        PracticeItem(id=1, title="A", content="我爱学习"),
        PracticeItem(id=2, title="B", content="天天向上"),
        PracticeItem(id=3, title="C", content="慢慢说"),
    ]


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Initialized database seeded with the preset passages."""
    path = (tmp_path / "speakeasy.db").as_posix()
    asyncio.run(initialize_database(path))
    return path


@pytest.fixture
def manager(db_path: str) -> DatabaseManager:
    return DatabaseManager(db_path)
