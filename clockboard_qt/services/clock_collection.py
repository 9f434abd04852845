# clockboard_qt/services/clock_collection.py
"""
Service holding the ordered collection of clocks on the board
Add, remove, move, drag-move, edit, global 12/24h broadcast
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional
import logging

from PySide6.QtCore import QObject, Signal

from ..models.clock_entity import ClockEntity
from ..utils.errors import ClockNotFoundError, IndexOutOfRangeError

logger = logging.getLogger(__name__)


# ========== EVENTS ==========

class ChangeKind(Enum):
    """Kinds of collection change"""
    ADDED = "added"
    REMOVED = "removed"
    MOVED = "moved"
    EDITED = "edited"
    FORMAT_CHANGED = "format_changed"
    RESET = "reset"


@dataclass(frozen=True)
class ClockCollectionEvent:
    """Structured change notification sent to the presentation layer"""
    kind: ChangeKind
    clock_id: Optional[str] = None
    index: Optional[int] = None  # position after the change
    old_index: Optional[int] = None  # position before a move/remove


# ========== COLLECTION ==========

class ClockCollection(QObject):
    """
    Ordered, mutable list of clocks

    List position is the layout position. Mutations are addressed by clock
    identity; index helpers exist for the drag-and-drop path.
    """

    # Signals
    changed = Signal(object)  # ClockCollectionEvent
    clock_added = Signal(str, int)  # clock_id, index
    clock_removed = Signal(str, int)  # clock_id, old index
    clock_moved = Signal(str, int, int)  # clock_id, old index, new index
    clock_edited = Signal(str)  # clock_id
    format_changed = Signal(bool)  # is_24_hour
    collection_reset = Signal()

    def __init__(self, entities: Optional[Iterable[ClockEntity]] = None,
                 global_format: bool = False, parent=None):
        super().__init__(parent)
        self._items: List[ClockEntity] = list(entities or [])
        self.global_format = bool(global_format)

    # ========== QUERIES ==========

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ClockEntity]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> ClockEntity:
        self._check_index(index)
        return self._items[index]

    @property
    def items(self) -> List[ClockEntity]:
        """Snapshot of the clocks in layout order"""
        return list(self._items)

    def ids(self) -> List[str]:
        return [entity.clock_id for entity in self._items]

    def index_of(self, clock_id: str) -> int:
        """
        Current position of a clock

        Raises:
            ClockNotFoundError: no clock with that id
        """
        for index, entity in enumerate(self._items):
            if entity.clock_id == clock_id:
                return index
        raise ClockNotFoundError(clock_id)

    def get(self, clock_id: str) -> ClockEntity:
        return self._items[self.index_of(clock_id)]

    def _check_index(self, index: int):
        if not isinstance(index, int) or not 0 <= index < len(self._items):
            raise IndexOutOfRangeError(
                f"Index {index} out of range for {len(self._items)} clocks"
            )

    # ========== ADD / REMOVE ==========

    def add(self, entity: ClockEntity) -> int:
        """
        Append a clock at the end

        Returns:
            Index of the new clock (len - 1)
        """
        self._items.append(entity)
        index = len(self._items) - 1
        logger.debug(f"Clock added: {entity.clock_id} at {index}")
        self._emit(ClockCollectionEvent(ChangeKind.ADDED, entity.clock_id, index))
        self.clock_added.emit(entity.clock_id, index)
        return index

    def remove_at(self, index: int) -> ClockEntity:
        """
        Remove the clock at index

        Raises:
            IndexOutOfRangeError: index outside the collection
        """
        self._check_index(index)
        entity = self._items.pop(index)
        logger.debug(f"Clock removed: {entity.clock_id} from {index}")
        self._emit(ClockCollectionEvent(ChangeKind.REMOVED, entity.clock_id,
                                        None, index))
        self.clock_removed.emit(entity.clock_id, index)
        return entity

    def remove(self, clock_id: str) -> ClockEntity:
        return self.remove_at(self.index_of(clock_id))

    # ========== MOVE ==========

    def move_up_at(self, index: int) -> bool:
        """Swap with the previous clock; no-op at index 0"""
        self._check_index(index)
        if index == 0:
            return False
        self._swap(index, index - 1)
        return True

    def move_down_at(self, index: int) -> bool:
        """Swap with the next clock; no-op at the last index"""
        self._check_index(index)
        if index == len(self._items) - 1:
            return False
        self._swap(index, index + 1)
        return True

    def move_up(self, clock_id: str) -> bool:
        return self.move_up_at(self.index_of(clock_id))

    def move_down(self, clock_id: str) -> bool:
        return self.move_down_at(self.index_of(clock_id))

    def move_to(self, source_index: int, target_index: int) -> bool:
        """
        Drag-and-drop reorder

        Removes the source and inserts it at target_index. When the source
        sits before the target, the target shifts down by one after the
        removal, so the insert index is decremented.

        Args:
            source_index: position of the dragged clock
            target_index: position of the clock it was dropped on

        Returns:
            True if the order changed
        """
        self._check_index(source_index)
        self._check_index(target_index)
        if source_index == target_index:
            return False

        entity = self._items.pop(source_index)
        insert_at = target_index - 1 if source_index < target_index else target_index
        self._items.insert(insert_at, entity)

        if insert_at == source_index:
            return False

        self._emit_moved(entity.clock_id, source_index, insert_at)
        return True

    def move(self, clock_id: str, target_clock_id: str) -> bool:
        """Drop clock_id onto target_clock_id"""
        return self.move_to(self.index_of(clock_id), self.index_of(target_clock_id))

    def _swap(self, index: int, other: int):
        self._items[index], self._items[other] = self._items[other], self._items[index]
        self._emit_moved(self._items[other].clock_id, index, other)

    def _emit_moved(self, clock_id: str, old_index: int, new_index: int):
        logger.debug(f"Clock moved: {clock_id} {old_index} -> {new_index}")
        self._emit(ClockCollectionEvent(ChangeKind.MOVED, clock_id, new_index, old_index))
        self.clock_moved.emit(clock_id, old_index, new_index)

    # ========== EDIT / FORMAT ==========

    def edit(self, clock_id: str, new_time_zone_id: str, new_labels: Iterable[str]):
        """
        Replace a clock's time zone and labels

        Raises:
            ClockNotFoundError: unknown clock id
            UnknownTimeZoneError: clock left unchanged
        """
        index = self.index_of(clock_id)
        self._items[index].edit(new_time_zone_id, new_labels)
        self._emit(ClockCollectionEvent(ChangeKind.EDITED, clock_id, index))
        self.clock_edited.emit(clock_id)

    def set_global_format(self, is_24_hour: bool):
        """Store the toggle and push it to every clock currently present"""
        self.global_format = bool(is_24_hour)
        for entity in self._items:
            entity.set_format(self.global_format)
        self._emit(ClockCollectionEvent(ChangeKind.FORMAT_CHANGED))
        self.format_changed.emit(self.global_format)

    def replace_all(self, entities: Iterable[ClockEntity], global_format: bool):
        """Swap the whole content, e.g. after loading a document"""
        self._items = list(entities)
        self.global_format = bool(global_format)
        logger.info(f"Collection reset with {len(self._items)} clocks")
        self._emit(ClockCollectionEvent(ChangeKind.RESET))
        self.collection_reset.emit()

    def _emit(self, event: ClockCollectionEvent):
        self.changed.emit(event)
