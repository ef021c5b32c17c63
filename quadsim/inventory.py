"""Equipment slots filled from an inventory by drag-and-drop commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Union

DEFAULT_SLOT_LABELS = (
    "Left Mouse Button",
    "Right Mouse Button",
    "Middle Mouse Button",
    "Space",
    '"1"',
    '"2"',
    '"3"',
)


@dataclass
class Slot:
    """An equipment slot, empty when ``item`` is None."""

    id: int
    label: str
    item: str | None = None


@dataclass(frozen=True)
class Unfit:
    """Remove the item from a slot."""

    target_slot: int


@dataclass(frozen=True)
class Fit:
    """Put an inventory item into a slot."""

    target_slot: int
    item: str


@dataclass(frozen=True)
class Refit:
    """Move the item from one slot to another."""

    target_slot: int
    origin_slot: int


FittingCommand = Union[Unfit, Fit, Refit]


@dataclass
class Inventory:
    """Bought items plus the slots they can be fitted into."""

    items: list[str] = field(default_factory=list)
    slots: list[Slot] = field(default_factory=list)

    @classmethod
    def with_labels(cls, labels: Iterable[str] = DEFAULT_SLOT_LABELS) -> Inventory:
        """An empty inventory with one slot per label, numbered from zero."""
        return cls(slots=[Slot(index, label) for index, label in enumerate(labels)])

    def __post_init__(self) -> None:
        if not self.slots:
            self.slots = [Slot(i, label) for i, label in enumerate(DEFAULT_SLOT_LABELS)]
        ids = [slot.id for slot in self.slots]
        if len(set(ids)) != len(ids):
            raise ValueError("slot ids must be unique")

    def _find(self, slot_id: int) -> Slot | None:
        return next((slot for slot in self.slots if slot.id == slot_id), None)

    def buy(self, item: str) -> None:
        """Add an item to the inventory."""
        self.items.append(item)

    def set_item(self, slot_id: int, item: str | None) -> None:
        """Put ``item`` into the slot; unknown slot ids are ignored."""
        slot = self._find(slot_id)
        if slot is not None:
            slot.item = item

    def slot_item(self, slot_id: int) -> str | None:
        """The item in a slot; raises KeyError for an unknown slot."""
        slot = self._find(slot_id)
        if slot is None:
            raise KeyError(slot_id)
        return slot.item

    def apply(self, command: FittingCommand) -> None:
        """Carry out a fitting command."""
        if isinstance(command, Unfit):
            self.set_item(command.target_slot, None)
        elif isinstance(command, Fit):
            self.set_item(command.target_slot, command.item)
        elif isinstance(command, Refit):
            origin = self._find(command.origin_slot)
            origin_item = origin.item if origin is not None else None
            self.set_item(command.target_slot, origin_item)
            self.set_item(command.origin_slot, None)
        else:
            raise TypeError(f"not a fitting command: {command!r}")