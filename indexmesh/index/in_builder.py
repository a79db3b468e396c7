"""
In Builder: bit allocation for "value IN (v1, v2, ...)" queries

Each candidate value gets its own power-of-two bit. A query for any of a
subset of values looks up the OR of their bits; a document holding a value
writes every mask that contains that value's bit, so each query mask that
includes the value finds one of the document's own keys.

    ib = InBuilder()
    open_, closed, pending = ib.new_bit(), ib.new_bit(), ib.new_bit()

    Indexes(conf).add("status", *ib.indexes_for(open_))   # "1", "3", "5", "7"
    Filters(conf).add("status", ib.filter_for(open_, pending))  # "5"

Callers keep their own value -> bit mapping; the builder only knows the
allocation sequence. Not thread-safe.
"""

from __future__ import annotations

import numpy as np

from indexmesh.core import constants as C
from indexmesh.core.types import Bit
from indexmesh.observability.logging import StructuredLogger

_logger = StructuredLogger(__name__)


class InBuilder:
    """
    Sequential power-of-two allocator with index / filter rendering.

    Capacity is bit_width distinct values. Allocating past it raises
    OverflowError: the caller designed more IN-able values than fit.
    """

    __slots__ = ("_bit_width", "_allocated")

    def __init__(self, bit_width: int = C.DEFAULT_IN_BIT_WIDTH) -> None:
        if bit_width not in C.SUPPORTED_IN_BIT_WIDTHS:
            raise ValueError(
                f"bit_width must be one of {C.SUPPORTED_IN_BIT_WIDTHS}, got {bit_width}"
            )
        self._bit_width = bit_width
        self._allocated = 0

    @property
    def bit_width(self) -> int:
        return self._bit_width

    @property
    def allocated(self) -> int:
        """Number of bits handed out so far."""
        return self._allocated

    def new_bit(self) -> Bit:
        """Allocate the next unused bit, starting at 1."""
        if self._allocated >= self._bit_width:
            _logger.critical(
                "in builder bits exhausted",
                bit_width=self._bit_width,
            )
            raise OverflowError(f"no bit left in {self._bit_width}-bit InBuilder")
        bit = Bit(1 << self._allocated)
        self._allocated += 1
        return bit

    def _mask(self, bits: tuple[Bit, ...]) -> int:
        mask = 0
        for bit in bits:
            if bit <= 0 or bit & (bit - 1) or bit >= (1 << self._allocated):
                raise ValueError(f"{bit} is not a bit allocated by this InBuilder")
            mask |= bit
        return mask

    def indexes_for(self, *bits: Bit) -> list[str]:
        """
        Keys a document holding bits must write.

        Every mask in [1, 2**allocated) containing all of bits, as
        ascending decimal strings. No bits means no keys.
        """
        if not bits:
            return []
        required = self._mask(bits)
        free = [1 << i for i in range(self._allocated) if not required & (1 << i)]

        # selector j-th bit switches free[j] on
        selectors = np.arange(1 << len(free), dtype=np.uint64)
        masks = np.full(selectors.shape, required, dtype=np.uint64)
        for j, bit in enumerate(free):
            masks |= ((selectors >> np.uint64(j)) & np.uint64(1)) * np.uint64(bit)
        masks.sort()
        return [str(mask) for mask in masks.tolist()]

    def filter_for(self, *bits: Bit) -> str:
        """Key a query for "value in bits" looks up."""
        return str(self._mask(bits))

    def __repr__(self) -> str:
        return f"InBuilder(bit_width={self._bit_width}, allocated={self._allocated})"
