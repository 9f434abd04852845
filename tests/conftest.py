# tests/conftest.py
from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication

from clockboard_qt.models.clock_entity import ClockEntity


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """Event-loop-less Qt application so QObject signals behave as in the app"""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeFontRegistry:
    """Font registry with a fixed family list and font files by file name"""

    def __init__(self, families=("Arial", "Courier New"), file_faces=None):
        self._families = list(families)
        self.file_faces = dict(file_faces or {})
        self.loaded = []

    def has_family(self, name):
        return any(f.casefold() == name.casefold() for f in self._families)

    def load_font_file(self, path):
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(path)
        self.loaded.append(path)
        return list(self.file_faces.get(path.name, []))

    def families(self):
        return list(self._families)


@pytest.fixture
def font_registry():
    return FakeFontRegistry(file_faces={"DS-DIGI.TTF": ["DS-Digital"]})


@pytest.fixture
def make_clocks():
    def _make(*locations, zone="UTC"):
        return [ClockEntity.create(location, [], zone, False) for location in locations]
    return _make
