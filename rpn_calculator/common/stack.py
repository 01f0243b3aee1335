"""Operand stack used during a single evaluation run."""
from typing import List

from rpn_calculator.common.errors import StackUnderflowError


class OperandStack:
    """
    Last-in-first-out sequence of integers. The top is the end of the list.

    The stack also keeps a floor: the height right after the latest MAX result
    was pushed. Values at or below the floor belong to an earlier MAX segment,
    so a later MAX only drains what was pushed above it.
    """

    def __init__(self) -> None:
        self._values: List[int] = []
        self._floor: int = 0

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"OperandStack({self._values!r}, floor={self._floor})"

    @property
    def floor(self) -> int:
        return self._floor

    def push(self, value: int) -> None:
        self._values.append(value)

    def pop(self) -> int:
        """
        Remove and return the top value.

        :return: Top of the stack
        :rtype: int
        :raises StackUnderflowError: If the stack is empty
        """
        if not self._values:
            raise StackUnderflowError("Cannot pop from an empty operand stack")
        value = self._values.pop()
        # Arithmetic may consume a previous MAX result
        self._floor = min(self._floor, len(self._values))
        return value

    def drain_segment(self) -> List[int]:
        """
        Remove every value pushed above the floor.

        When nothing sits above the floor, the top value alone is removed, so
        MAX applied straight after MAX returns the same result.

        :return: Removed values, bottom first (empty only if the stack is empty)
        :rtype: List[int]
        """
        if len(self._values) == self._floor and self._values:
            return [self.pop()]
        values, self._values = self._values[self._floor:], self._values[: self._floor]
        return values

    def push_floor(self, value: int) -> None:
        """Push a MAX result and raise the floor above it."""
        self._values.append(value)
        self._floor = len(self._values)
