"""Shared fixtures for envcascade tests."""

from pathlib import Path
from typing import Any, List, Tuple

import pytest

from envcascade.logger import Logger


class RecordingLogger(Logger):
    """Logger that keeps every call for assertions."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, dict]] = []

    def _record(self, level: str, message: str, **kwargs: Any) -> None:
        self.records.append((level, message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._record("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._record("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._record("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._record("ERROR", message, **kwargs)

    def get_session_id(self) -> str:
        return "recorder"

    def messages(self, level: str = "INFO") -> List[str]:
        return [message for lvl, message, _ in self.records if lvl == level]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """Installation root with base, api and worker env files."""
    (tmp_path / "apps" / "api").mkdir(parents=True)
    (tmp_path / "apps" / "worker").mkdir(parents=True)

    (tmp_path / ".env.base").write_text(
        "# shared defaults\n"
        "DATABASE_URL=postgres://base\n"
        "REDIS_URL=redis://localhost:6379\n"
        "LOG_LEVEL=info\n"
        "NODE_ENV=development\n",
        encoding="utf-8",
    )
    (tmp_path / "apps" / "api" / ".env").write_text(
        "PORT=4001\nDATABASE_URL=postgres://api\nAPI_KEY=secret-key\n",
        encoding="utf-8",
    )
    (tmp_path / "apps" / "worker" / ".env").write_text(
        "DEBUG=true\n",
        encoding="utf-8",
    )
    return tmp_path
