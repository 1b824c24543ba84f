"""Immutable list of test inputs shared by the detail and quick test pages.

Updates: v0.1.0 - 2026-10-07 - Introduce TestInputList with add/remove/update helpers.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from models.test_run_model import TestInput


@dataclass(frozen=True, slots=True)
class TestInputList:
    """Ordered inputs that always hold at least one entry."""
    __test__ = False

    items: tuple[TestInput, ...] = (TestInput(),)

    def __post_init__(self) -> None:
        if not self.items:
            object.__setattr__(self, "items", (TestInput(),))

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> TestInputList:
        """Build a list from raw question strings."""
        return cls(tuple(TestInput(question=text) for text in texts))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[TestInput]:
        return iter(self.items)

    def __getitem__(self, index: int) -> TestInput:
        return self.items[index]

    @property
    def can_remove(self) -> bool:
        """Return True when removing an entry keeps the list non-empty."""
        return len(self.items) > 1

    def add(self) -> TestInputList:
        return TestInputList((*self.items, TestInput()))

    def remove(self, index: int) -> TestInputList:
        """Drop the entry at *index*; a no-op for the last entry or a bad index."""
        if not self.can_remove or not 0 <= index < len(self.items):
            return self
        return TestInputList(self.items[:index] + self.items[index + 1 :])

    def update(self, index: int, text: str) -> TestInputList:
        if not 0 <= index < len(self.items):
            raise IndexError(f"test input index {index} out of range")
        items = list(self.items)
        items[index] = TestInput(question=text)
        return TestInputList(tuple(items))

    def non_blank(self) -> tuple[TestInput, ...]:
        """Return the entries that will be submitted."""
        return tuple(item for item in self.items if not item.is_blank())

    def texts(self) -> list[str]:
        return [item.question for item in self.items]


__all__ = ["TestInputList"]
