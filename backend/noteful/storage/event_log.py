import json
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from noteful.storage.documents import _safe_user_dir, _utc_now_iso


def _events_path(base_dir: Path, user_id: str) -> Path:
    # data/users/<user>/events/events.log
    return _safe_user_dir(base_dir, user_id) / "events" / "events.log"


@dataclass(frozen=True)
class Event:
    event_type: str
    user_id: str
    target_id: Optional[str] = None
    meta: Optional[dict[str, Any]] = None

    def to_json_line(self) -> str:
        obj = {
            "event_id": str(uuid.uuid4()),
            "event_type": self.event_type,
            "ts": _utc_now_iso(),
            "user_id": self.user_id,
            "target_id": self.target_id,
            "meta": self.meta or {},
        }
        return json.dumps(obj, ensure_ascii=False)


class EventLog:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir

    def emit(self, event: Event) -> None:
        path = _events_path(self.base_dir, event.user_id)
        path.parent.mkdir(parents=True, exist_ok=True)

        # append-only, durable write
        with path.open("a", encoding="utf-8") as f:
            f.write(event.to_json_line() + "\n")
            f.flush()
            os.fsync(f.fileno())

    def read(self, user_id: str) -> list[dict[str, Any]]:
        path = _events_path(self.base_dir, user_id)
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]
