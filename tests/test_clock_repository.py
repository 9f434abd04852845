# tests/test_clock_repository.py
import json

import pytest

from clockboard_qt.repositories.clock_repository import (
    ClockRepository,
    default_clocks,
    deserialize,
    serialize,
)
from clockboard_qt.repositories.settings_repository import SettingsRepository
from clockboard_qt.services.clock_collection import ClockCollection
from clockboard_qt.models.clock_entity import ClockEntity
from clockboard_qt.utils.errors import (
    DocumentIOError,
    DocumentParseError,
    UnknownTimeZoneError,
)


def record(location, zone, labels=None, is_24_hour=False):
    return {"Location": location, "Labels": labels or [], "TimeZoneId": zone,
            "Is24HourFormat": is_24_hour}


@pytest.fixture
def settings(tmp_path):
    return SettingsRepository(tmp_path / "settings.json")


def test_serialize_keeps_order_and_keys():
    collection = ClockCollection([
        ClockEntity.create("Tokyo", ["JP"], "Asia/Tokyo", True),
        ClockEntity.create("Paris", [], "Europe/Paris", True),
    ])
    assert serialize(collection) == [
        record("Tokyo", "Asia/Tokyo", ["JP"], True),
        record("Paris", "Europe/Paris", [], True),
    ]


def test_deserialize_valid_document():
    result = deserialize([record("Tokyo", "Asia/Tokyo", ["JP"]),
                          record("Paris", "Europe/Paris")])
    assert result.ok
    assert [e.location for e in result.entities] == ["Tokyo", "Paris"]
    assert result.entities[0].labels == ["JP"]


def test_bad_zone_is_skipped_and_reported():
    result = deserialize([
        record("Tokyo", "Asia/Tokyo"),
        record("Nowhere", "Atlantis/Capital"),
        record("Paris", "Europe/Paris"),
    ])
    assert [e.location for e in result.entities] == ["Tokyo", "Paris"]
    assert len(result.errors) == 1
    assert result.errors[0].index == 1
    assert isinstance(result.errors[0].error, UnknownTimeZoneError)
    assert "Record 1" in str(result.errors[0])


@pytest.mark.parametrize("bad", [
    "not an object",
    {"Location": "x"},
    {"Location": "x", "TimeZoneId": 5},
    {"Location": 3, "TimeZoneId": "UTC"},
    {"Location": "x", "TimeZoneId": "UTC", "Labels": "a,b"},
    {"Location": "x", "TimeZoneId": "UTC", "Labels": ["a", 2]},
])
def test_malformed_records_are_skipped(bad):
    result = deserialize([record("Tokyo", "Asia/Tokyo"), bad])
    assert len(result.entities) == 1
    assert isinstance(result.errors[0].error, DocumentParseError)


def test_missing_optional_fields_take_defaults():
    result = deserialize([{"TimeZoneId": "UTC"}])
    entity = result.entities[0]
    assert entity.location == ""
    assert entity.labels == []
    assert entity.is_24_hour is False


@pytest.mark.parametrize("document", [{}, "[]", 3, None])
def test_document_must_be_an_array(document):
    with pytest.raises(DocumentParseError):
        deserialize(document)


def test_empty_document_gives_empty_result():
    result = deserialize([])
    assert result.entities == [] and result.global_format is False


def test_global_format_comes_from_first_record():
    result = deserialize([
        record("A", "UTC", is_24_hour=True),
        record("B", "UTC", is_24_hour=False),
    ])
    assert result.global_format is True
    assert [e.is_24_hour for e in result.entities] == [True, True]


def test_later_record_flags_are_ignored():
    result = deserialize([
        record("A", "UTC", is_24_hour=False),
        record("B", "UTC", is_24_hour=True),
    ])
    assert result.global_format is False
    assert all(e.is_24_hour is False for e in result.entities)


def test_record_without_flag_inherits_global_format():
    result = deserialize([
        record("A", "UTC", is_24_hour=True),
        {"Location": "B", "TimeZoneId": "UTC"},
    ])
    assert result.entities[1].is_24_hour is True


def test_non_bool_first_flag_means_12_hour():
    result = deserialize([{"TimeZoneId": "UTC", "Is24HourFormat": "yes"}])
    assert result.global_format is False


def test_default_clocks():
    clocks = default_clocks()
    assert [c.location for c in clocks] == ["US - East Coast", "US - Central"]
    assert clocks[0].labels == ["New York, NY", "East Coast"]
    assert clocks[1].time_zone_id == "America/Chicago"


def test_save_then_load(tmp_path, settings):
    repo = ClockRepository(settings)
    path = tmp_path / "clocks.json"
    collection = ClockCollection([ClockEntity.create("Paris", ["FR"], "Europe/Paris", True)])

    repo.save(collection, path)
    result = repo.load(path)

    assert json.loads(path.read_text(encoding="utf-8"))[0]["TimeZoneId"] == "Europe/Paris"
    assert [e.location for e in result.entities] == ["Paris"]
    assert settings.get_last_clock_file() == str(path)


@pytest.mark.parametrize("first_format", [True, False])
def test_round_trip_keeps_every_clock(tmp_path, first_format):
    collection = ClockCollection([
        ClockEntity.create("East", ["  New York ", "", "   ", "NY", "NY"],
                           "Eastern Standard Time", first_format),
        ClockEntity.create("", [], "Asia/Kolkata", not first_format),
        ClockEntity.create("Dublin", ["IE"], "Europe/Dublin", not first_format),
        ClockEntity.create("St. John's", ["NL"], "America/St_Johns", first_format),
    ])
    path = tmp_path / "clocks.json"

    ClockRepository().save(collection, path)
    result = ClockRepository().load(path)

    assert result.ok
    assert result.global_format is first_format
    assert len(result.entities) == len(collection)
    for saved, loaded in zip(collection, result.entities):
        assert loaded.location == saved.location
        assert loaded.labels == saved.labels
        assert loaded.display_labels == saved.display_labels
        assert loaded.time_zone_id == saved.time_zone_id
        assert loaded.is_24_hour is first_format
    assert result.entities[0].display_labels == ["New York", "NY", "NY"]
    assert result.entities[0].time_zone_id == "Eastern Standard Time"


def test_load_missing_file(tmp_path):
    with pytest.raises(DocumentIOError):
        ClockRepository().load(tmp_path / "nope.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(DocumentParseError):
        ClockRepository().load(path)


def test_save_to_unwritable_path(tmp_path):
    with pytest.raises(DocumentIOError):
        ClockRepository().save(ClockCollection(), tmp_path / "missing" / "dir" / "c.json")


def test_restore_session_without_history(settings):
    result, error = ClockRepository(settings).restore_session()
    assert error is None
    assert [c.location for c in result.entities] == ["US - East Coast", "US - Central"]


def test_restore_session_with_corrupt_file(tmp_path, settings):
    path = tmp_path / "clocks.json"
    path.write_text("{not json", encoding="utf-8")
    settings.set_last_clock_file(str(path))

    result, error = ClockRepository(settings).restore_session()

    assert isinstance(error, DocumentParseError)
    assert len(result.entities) == 2


def test_restore_session_loads_last_file(tmp_path, settings):
    path = tmp_path / "clocks.json"
    path.write_text(json.dumps([record("Tokyo", "Asia/Tokyo", is_24_hour=True)]),
                    encoding="utf-8")
    settings.set_last_clock_file(str(path))

    result, error = ClockRepository(settings).restore_session()

    assert error is None
    assert result.global_format is True
    assert [c.location for c in result.entities] == ["Tokyo"]
