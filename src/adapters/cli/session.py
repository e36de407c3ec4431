"""
adapters.cli.session - Local session credential storage.

Credentials (user_id + JWT access_token) are stored in
~/.medicinal-diet/session.json so the user stays logged in between CLI
invocations without re-entering their password every time.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path

logger = logging.getLogger(__name__)

_SESSION_DIR  = Path.home() / ".medicinal-diet"
_SESSION_FILE = _SESSION_DIR / "session.json"


@dataclass
class Session:
    user_id: int
    access_token: str
    nickname: str = ""


def load_session() -> Session | None:
    """Return the stored session, or None if the user is not logged in."""
    if not _SESSION_FILE.exists():
        return None
    try:
        data = json.loads(_SESSION_FILE.read_text(encoding="utf-8"))
        return Session(**data)
    except (ValueError, TypeError) as exc:
        logger.warning("Ignoring unreadable session file %s: %s", _SESSION_FILE, exc)
        return None


def save_session(session: Session) -> None:
    """Persist session credentials to disk."""
    _SESSION_DIR.mkdir(parents=True, exist_ok=True)
    _SESSION_FILE.write_text(
        json.dumps(asdict(session), indent=2), encoding="utf-8"
    )


def clear_session() -> None:
    """Delete stored credentials (logout)."""
    if _SESSION_FILE.exists():
        _SESSION_FILE.unlink()
