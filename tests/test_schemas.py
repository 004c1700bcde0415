# tests/test_schemas.py
import json

from errors import MalformedBody, PayloadTooLarge
from schemas import LogEntry, Reading, decode


def test_decode_reading():
    body = json.dumps({"temp": 21.5, "humidity": 40.25, "sensor": "estufa-1"}).encode()
    reading = decode(body, Reading)
    assert reading == Reading(temp=21.5, humidity=40.25, sensor="estufa-1")


def test_decode_accepts_integer_numbers_and_empty_strings():
    reading = decode(b'{"temp": 20, "humidity": 0, "sensor": ""}', Reading)
    assert isinstance(reading, Reading)
    assert reading.temp == 20.0
    assert reading.sensor == ""


def test_decode_ignores_unknown_fields():
    entry = decode(b'{"message": "reboot", "sensor": "s1", "extra": true}', LogEntry)
    assert entry == LogEntry(message="reboot", sensor="s1")


def test_decode_missing_field():
    result = decode(b'{"sensor": "a"}', Reading)
    assert isinstance(result, MalformedBody)
    assert result.status_code == 400
    assert "temp" in result.message
    assert "humidity" in result.message


def test_decode_rejects_wrong_types():
    """Strings numéricas não são convertidas, e números não viram texto."""
    assert isinstance(decode(b'{"temp": "21.5", "humidity": 1, "sensor": "a"}', Reading), MalformedBody)
    assert isinstance(decode(b'{"message": 12, "sensor": "a"}', LogEntry), MalformedBody)


def test_decode_rejects_invalid_json():
    for body in (b"", b"{", b"[1, 2]", b"null"):
        result = decode(body, LogEntry)
        assert isinstance(result, MalformedBody)
        assert result.message


def test_decode_rejects_non_finite_numbers():
    assert isinstance(decode(b'{"temp": NaN, "humidity": 1, "sensor": "a"}', Reading), MalformedBody)


def test_decode_size_limit():
    body = b'{"message": "' + b"x" * 100 + b'", "sensor": "a"}'
    assert isinstance(decode(body, LogEntry, limit=len(body)), LogEntry)

    result = decode(body, LogEntry, limit=len(body) - 1)
    assert isinstance(result, PayloadTooLarge)
    assert result.status_code == 413


def test_payload_str_matches_log_format():
    assert str(Reading(temp=1.5, humidity=2.5, sensor="s")) == "sensor: s humidity: 2.5 temperature: 1.5"
    assert str(LogEntry(message="oi", sensor="s")) == "sensor: s message: oi"
