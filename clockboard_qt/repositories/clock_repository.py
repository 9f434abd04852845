# clockboard_qt/repositories/clock_repository.py
"""
Repository for clock documents
Serialize / deserialize the collection, file IO, last-used file restore

Document format: JSON array of
    {"Location": str, "Labels": [str], "TimeZoneId": str, "Is24HourFormat": bool}
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple
import logging

from ..models.clock_entity import ClockEntity
from ..services.clock_collection import ClockCollection
from ..utils.constants import DEFAULT_CLOCKS
from ..utils.errors import (
    ClockBoardError,
    DocumentIOError,
    DocumentParseError,
    UnknownTimeZoneError,
)

logger = logging.getLogger(__name__)

KEY_LOCATION = "Location"
KEY_LABELS = "Labels"
KEY_TIME_ZONE_ID = "TimeZoneId"
KEY_IS_24_HOUR = "Is24HourFormat"


# ========== RESULT MODELS ==========

@dataclass
class RecordError:
    """A record skipped while loading"""
    index: int
    error: ClockBoardError

    def __str__(self):
        return f"Record {self.index}: {self.error}"


@dataclass
class ClockLoadResult:
    """Outcome of reading a clock document"""
    entities: List[ClockEntity] = field(default_factory=list)
    global_format: bool = False
    errors: List[RecordError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


# ========== CODEC ==========

def serialize(collection: ClockCollection) -> List[dict]:
    """One record per clock, in collection order"""
    return [
        {
            KEY_LOCATION: entity.location,
            KEY_LABELS: list(entity.labels),
            KEY_TIME_ZONE_ID: entity.time_zone_id,
            KEY_IS_24_HOUR: entity.is_24_hour,
        }
        for entity in collection
    ]


def _read_global_format(document: list) -> bool:
    # The flag is written on every record but only record 0 is read back.
    if document and isinstance(document[0], dict):
        value = document[0].get(KEY_IS_24_HOUR)
        if isinstance(value, bool):
            return value
    return False


def _parse_record(record: Any, global_format: bool) -> ClockEntity:
    if not isinstance(record, dict):
        raise DocumentParseError(f"expected an object, got {type(record).__name__}")

    zone_id = record.get(KEY_TIME_ZONE_ID)
    if not isinstance(zone_id, str) or not zone_id:
        raise DocumentParseError(f"missing or invalid '{KEY_TIME_ZONE_ID}'")

    location = record.get(KEY_LOCATION)
    if location is None:
        location = ""
    elif not isinstance(location, str):
        raise DocumentParseError(f"'{KEY_LOCATION}' must be a string")

    labels = record.get(KEY_LABELS)
    if labels is None:
        labels = []
    elif not isinstance(labels, list) or not all(isinstance(x, str) for x in labels):
        raise DocumentParseError(f"'{KEY_LABELS}' must be a list of strings")

    # Per-record flags are ignored; the whole board follows record 0.
    return ClockEntity.create(location, labels, zone_id, global_format)


def deserialize(document: Any) -> ClockLoadResult:
    """
    Rebuild clocks from a parsed document

    Bad records are skipped and reported in ClockLoadResult.errors; the
    remaining records load in document order.

    Raises:
        DocumentParseError: document is not a JSON array
    """
    if not isinstance(document, list):
        raise DocumentParseError("clock document must be a JSON array")

    result = ClockLoadResult(global_format=_read_global_format(document))

    for index, record in enumerate(document):
        try:
            result.entities.append(_parse_record(record, result.global_format))
        except (DocumentParseError, UnknownTimeZoneError) as e:
            logger.warning(f"Skipping clock record {index}: {e}")
            result.errors.append(RecordError(index, e))

    return result


def default_clocks(is_24_hour: bool = False) -> List[ClockEntity]:
    """Clocks shown when no document can be loaded"""
    return [
        ClockEntity.create(location, labels, zone_id, is_24_hour)
        for location, labels, zone_id in DEFAULT_CLOCKS
    ]


# ========== REPOSITORY CLASS ==========

class ClockRepository:
    """
    Read and write clock documents, remembering the last used file

    Args:
        settings_repo: SettingsRepository used to persist the last path;
                       optional for headless use
    """

    def __init__(self, settings_repo=None):
        self.settings_repo = settings_repo

    def load(self, path) -> ClockLoadResult:
        """
        Load a clock document

        Raises:
            DocumentIOError: file missing or unreadable
            DocumentParseError: invalid JSON or not an array
        """
        path = Path(path)
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentIOError(path, e) from e

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentParseError(f"{path}: {e}") from e

        result = deserialize(document)
        logger.info(f"Loaded {len(result.entities)} clocks from {path} "
                    f"({len(result.errors)} skipped)")
        self._remember(path)
        return result

    def save(self, collection: ClockCollection, path):
        """
        Write the collection to path

        Raises:
            DocumentIOError: file cannot be written
        """
        path = Path(path)
        try:
            path.write_text(json.dumps(serialize(collection), indent=2,
                                       ensure_ascii=False), encoding='utf-8')
        except OSError as e:
            raise DocumentIOError(path, e) from e

        logger.info(f"Saved {len(collection)} clocks to {path}")
        self._remember(path)

    def restore_session(self) -> Tuple[ClockLoadResult, Optional[ClockBoardError]]:
        """
        Load the last used file, or the default clocks

        Never raises. A whole-document failure gives the default clocks and
        the error; record-level failures stay in the result's errors.
        """
        last_path = self.settings_repo.get_last_clock_file() if self.settings_repo else ""

        if last_path and Path(last_path).is_file():
            try:
                return self.load(last_path), None
            except ClockBoardError as e:
                logger.error(f"Failed to load saved clocks: {e}")
                return ClockLoadResult(entities=default_clocks()), e

        return ClockLoadResult(entities=default_clocks()), None

    def _remember(self, path: Path):
        if self.settings_repo is not None:
            self.settings_repo.set_last_clock_file(str(path))
