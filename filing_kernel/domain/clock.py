"""
Clock -- Deterministic block-height abstraction.

Responsibility:
    Provides an injectable source of the current block height so that the
    host never reads a hidden global clock.  Registries themselves never
    touch a clock: the host reads the height once per call and stamps it
    into a ``CallContext``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Block height is a non-negative integer.
    - ``ManualBlockClock`` is monotonic non-decreasing: it can advance or
      hold, never move backwards.

Failure modes:
    - ValueError on a negative height, a negative advance, or an attempt to
      move a ManualBlockClock backwards.
"""

from abc import ABC, abstractmethod


def _check_height(height: int) -> int:
    if isinstance(height, bool) or not isinstance(height, int):
        raise ValueError(f"Block height must be an integer, got {height!r}")
    if height < 0:
        raise ValueError(f"Block height must be non-negative, got {height}")
    return height


class BlockClock(ABC):
    """
    Abstract block-height clock.

    Contract:
        ``height()`` returns the current logical height.  Successive calls
        never return a smaller value.
    """

    @abstractmethod
    def height(self) -> int:
        """Get the current block height."""
        ...


class FixedBlockClock(BlockClock):
    """Clock pinned to a single height. Useful for replaying one snapshot."""

    def __init__(self, height: int):
        self._height = _check_height(height)

    def height(self) -> int:
        return self._height


class ManualBlockClock(BlockClock):
    """
    Test and host clock with controlled, monotonic height.

    Guarantees:
        - ``height()`` returns the same value until ``advance()`` or
          ``set_height()`` is called.
        - ``set_height()`` refuses to move backwards.
    """

    def __init__(self, start_height: int = 0):
        self._height = _check_height(start_height)

    def height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Advance by ``blocks`` and return the new height."""
        if blocks < 0:
            raise ValueError(f"Cannot advance by a negative amount: {blocks}")
        self._height += blocks
        return self._height

    def set_height(self, height: int) -> None:
        """Jump to ``height``. Must not be below the current height."""
        _check_height(height)
        if height < self._height:
            raise ValueError(
                f"Block height cannot decrease: {self._height} -> {height}"
            )
        self._height = height
