import json
import uuid

from noteful.storage.event_log import Event, EventLog


def test_events_are_appended_per_user(tmp_path):
    log = EventLog(tmp_path)
    user = str(uuid.uuid4())
    log.emit(Event(event_type="NOTE_CREATED", user_id=user, target_id="n1"))
    log.emit(Event(event_type="FOLDER_DELETED", user_id=user, target_id="f1", meta={"detached_notes": 2}))

    p = tmp_path / "users" / user / "events" / "events.log"
    lines = [json.loads(line) for line in p.read_text(encoding="utf-8").splitlines()]
    assert [e["event_type"] for e in lines] == ["NOTE_CREATED", "FOLDER_DELETED"]
    assert lines[1]["meta"] == {"detached_notes": 2}
    assert lines[0]["meta"] == {}
    assert lines[0]["event_id"] != lines[1]["event_id"]
    assert log.read(user) == lines


def test_read_without_events(tmp_path):
    assert EventLog(tmp_path).read(str(uuid.uuid4())) == []
