from __future__ import annotations

import json
import os
import threading
import time
from typing import Any, Dict, Iterator, Optional, TextIO


class TelemetryLogger:
    """JSONL log of maze play, one JSON object per line.

    Two record kinds share the file:

    * ``"step"``: one per world step (episode, step, intent, score, agent state)
    * ``"episode"``: one per finished episode (final score, steps taken)

    Every record gets a wall-clock ``t`` field unless it already has one.
    Writes from several threads (the gateway) are serialised.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._lock = threading.Lock()
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")
        self.records_written = 0
        self.episodes_logged = 0
        self.best_score: Optional[int] = None

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append one step record."""
        self._write("step", record)

    def log_episode(self, episode: int, score: int, steps: int) -> None:
        """Append the summary of a finished episode and track the best score."""
        written = self._write("episode", {"episode": episode, "score": score, "steps": steps})
        if written:
            self.episodes_logged += 1
            if self.best_score is None or score > self.best_score:
                self.best_score = score

    def _write(self, kind: str, record: Dict[str, Any]) -> bool:
        record = dict(record, kind=kind)
        record.setdefault("t", time.time())
        line = json.dumps(record, separators=(",", ":"))
        with self._lock:
            # Dropped after close
            if self._fp is None:
                return False
            self._fp.write(line + "\n")
            self._fp.flush()
            self.records_written += 1
        return True

    def close(self) -> None:
        with self._lock:
            if self._fp is not None:
                self._fp.close()
                self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def read_records(path: str, kind: Optional[str] = None) -> Iterator[Dict[str, Any]]:
    """Yield records from a telemetry file, optionally only one ``kind``."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            record = json.loads(line)
            if kind is None or record.get("kind") == kind:
                yield record
