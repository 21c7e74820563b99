import pytest

from dossierkit.errors import InvalidInputError
from dossierkit.incident.parser import parse_json_log, parse_ndjson_log


def test_parse_json_log():
    json_text = """[
        {
            "timestamp": "2026-02-12T10:15:30Z",
            "source_system": "web-server",
            "actor": "user@example.com",
            "action": "login_attempt",
            "affected_resource": "auth-service",
            "evidence_text": "User successfully authenticated"
        }
    ]"""
    events = parse_json_log(json_text)
    assert len(events) == 1
    assert events[0].action == "login_attempt"
    assert events[0].severity == "LOW"
    assert events[0].timestamp_epoch_ms == 20260212101530
    assert events[0].timestamp_iso == "2026-02-12T10:15:30Z"


def test_parse_ndjson_log():
    ndjson = (
        '{"timestamp":"2026-02-12T10:15:30Z","source_system":"web","actor":"user1",'
        '"action":"login","affected_resource":"auth","evidence_text":"success"}\n'
        '{"timestamp":"2026-02-12T10:16:00Z","source_system":"db","actor":"user1",'
        '"action":"query","affected_resource":"users","evidence_text":"SELECT * FROM users"}'
    )
    events = parse_ndjson_log(ndjson)
    assert len(events) == 2
    assert events[0].timestamp_epoch_ms <= events[1].timestamp_epoch_ms


def test_parse_invalid_json():
    with pytest.raises(InvalidInputError):
        parse_json_log("{ invalid json }")


def test_json_log_must_be_array():
    with pytest.raises(InvalidInputError):
        parse_json_log('{"timestamp": "x"}')


def test_missing_field_rejected():
    with pytest.raises(InvalidInputError):
        parse_json_log('[{"timestamp":"2026","source_system":"a"}]')


def test_empty_log_rejected():
    with pytest.raises(InvalidInputError, match="No valid events"):
        parse_json_log("[]")
    with pytest.raises(InvalidInputError):
        parse_ndjson_log("\n\n  \n")


def test_ndjson_error_reports_line_number():
    ndjson = (
        '{"timestamp":"1","source_system":"a","actor":"u","action":"x",'
        '"affected_resource":"r","evidence_text":"e"}\n'
        "not json"
    )
    with pytest.raises(InvalidInputError, match="line 2"):
        parse_ndjson_log(ndjson)


def test_severity_inference_high():
    json_text = """[{
        "timestamp":"2026-02-12T10:15:30Z",
        "source_system":"web",
        "actor":"system",
        "action":"critical_error",
        "affected_resource":"api",
        "evidence_text":"System breach detected"
    }]"""
    assert parse_json_log(json_text)[0].severity == "HIGH"


def test_severity_inference_medium():
    json_text = """[{
        "timestamp":"2026-02-12T10:15:30Z",
        "source_system":"web",
        "actor":"user",
        "action":"login",
        "affected_resource":"auth",
        "evidence_text":"Access denied - timeout warning"
    }]"""
    assert parse_json_log(json_text)[0].severity == "MEDIUM"


def test_event_determinism():
    json_text = """[
        {"timestamp":"2026-02-12T10:15:30Z","source_system":"web","actor":"u1","action":"action1","affected_resource":"res1","evidence_text":"evt1"},
        {"timestamp":"2026-02-12T10:15:35Z","source_system":"web","actor":"u2","action":"action2","affected_resource":"res2","evidence_text":"evt2"}
    ]"""
    events1 = parse_json_log(json_text)
    events2 = parse_json_log(json_text)
    assert len(events1) == len(events2)
    for e1, e2 in zip(events1, events2):
        assert e1.event_id == e2.event_id
        assert e1.timestamp_epoch_ms == e2.timestamp_epoch_ms


def test_events_sorted_chronologically():
    json_text = """[
        {"timestamp":"2026-02-12T10:15:40Z","source_system":"a","actor":"u","action":"act","affected_resource":"r","evidence_text":"e"},
        {"timestamp":"2026-02-12T10:15:30Z","source_system":"b","actor":"u","action":"act","affected_resource":"r","evidence_text":"e"},
        {"timestamp":"2026-02-12T10:15:35Z","source_system":"c","actor":"u","action":"act","affected_resource":"r","evidence_text":"e"}
    ]"""
    events = parse_json_log(json_text)
    stamps = [e.timestamp_epoch_ms for e in events]
    assert stamps == sorted(stamps)
    assert [e.source_system for e in events] == ["b", "c", "a"]


def test_unparseable_timestamp_falls_back_to_index():
    json_text = """[
        {"timestamp":"2026","source_system":"a","actor":"u","action":"act","affected_resource":"r","evidence_text":"e"},
        {"timestamp":"unknown","source_system":"b","actor":"u","action":"act","affected_resource":"r","evidence_text":"e"}
    ]"""
    events = parse_json_log(json_text)
    fallback = [e for e in events if e.source_system == "b"][0]
    assert fallback.timestamp_epoch_ms == 1000


def test_event_id_shape():
    json_text = """[{"timestamp":"2026-02-12T10:15:30Z","source_system":"web","actor":"u","action":"act","affected_resource":"r","evidence_text":"e"}]"""
    event_id = parse_json_log(json_text)[0].event_id
    prefix, first, second, third = event_id.split("_")
    assert prefix == "INCIDENT"
    assert (len(first), len(second), len(third)) == (8, 4, 4)
    assert second == "0000"