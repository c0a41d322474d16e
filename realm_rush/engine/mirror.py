# realm_rush/engine/mirror.py
"""
Best-effort sinks that receive a copy of every committed match snapshot.

The engine never depends on a sink: publish() swallows and logs whatever
the sink raises, so results are identical with or without one attached.
"""
from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import Match

LOGGER = logging.getLogger(__name__)


class MatchMirror:
    def record(self, payload: Dict[str, Any]) -> None:
        raise NotImplementedError


class NullMirror(MatchMirror):
    def record(self, payload: Dict[str, Any]) -> None:
        return None


class MemoryMirror(MatchMirror):
    """Keeps every payload in order; handy for replays and tests."""

    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []

    def record(self, payload: Dict[str, Any]) -> None:
        self.records.append(payload)

    def latest(self, match_id: str) -> Optional[Dict[str, Any]]:
        for payload in reversed(self.records):
            if payload.get("matchId") == match_id:
                return payload
        return None


class JsonLinesMirror(MatchMirror):
    def __init__(self, path) -> None:
        self.path = Path(path)

    def record(self, payload: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(payload, sort_keys=True) + "\n")


def publish(mirror: Optional[MatchMirror], match: Match) -> bool:
    """Hand a snapshot to the mirror. Returns False if the mirror failed."""
    if mirror is None:
        return True
    payload = match.to_payload()
    payload["lastUpdateTime"] = int(time.time() * 1000)
    try:
        mirror.record(payload)
    except Exception as exc:
        LOGGER.warning("Mirror %s failed for match %s: %s", type(mirror).__name__, match.match_id or "-", exc)
        return False
    return True
