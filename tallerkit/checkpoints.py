"""Unsigned 32-bit arithmetic helpers, array-node lists and C-style string routines."""

from __future__ import annotations

import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import TextIO

U32_MASK = 0xFFFFFFFF


def _u32(value: int) -> int:
    if not isinstance(value, int) or not 0 <= value <= U32_MASK:
        raise ValueError(f"not an unsigned 32-bit integer: {value!r}")
    return value


def add_u32(a: int, b: int) -> int:
    """Return ``a + b`` wrapped to 32 bits."""
    return (_u32(a) + _u32(b)) & U32_MASK


def sub_u32(a: int, b: int) -> int:
    """Return ``a - b`` wrapped to 32 bits."""
    return (_u32(a) - _u32(b)) & U32_MASK


def alternate_sum_4(x1: int, x2: int, x3: int, x4: int) -> int:
    """Return ``x1 - x2 + x3 - x4`` in unsigned 32-bit arithmetic."""
    return sub_u32(add_u32(sub_u32(x1, x2), x3), x4)


def alternate_sum_8(
    x1: int, x2: int, x3: int, x4: int, x5: int, x6: int, x7: int, x8: int
) -> int:
    """Return ``x1 - x2 + x3 - x4 + x5 - x6 + x7 - x8`` in unsigned 32-bit arithmetic."""
    result = 0
    for sign, value in zip((1, -1) * 4, (x1, x2, x3, x4, x5, x6, x7, x8)):
        result = add_u32(result, value) if sign > 0 else sub_u32(result, value)
    return result


def product_2_f(x1: int, f1: float) -> int:
    """Multiply ``x1`` by ``f1`` and truncate the decimals away.

    Raises ValueError when the truncated product does not fit in 32 unsigned bits.
    """
    result = int(_u32(x1) * float(f1))
    if not 0 <= result <= U32_MASK:
        raise ValueError(f"product {result} does not fit in 32 unsigned bits")
    return result


def product_9_f(integers: Sequence[int], floats: Sequence[float]) -> float:
    """Multiply nine integers and nine floats as doubles.

    The floats are multiplied together first, then the result is multiplied
    by each integer in turn.
    """
    if len(integers) != 9 or len(floats) != 9:
        raise ValueError("product_9_f takes exactly nine integers and nine floats")
    result = 1.0
    for f in floats:
        result *= float(f)
    for x in integers:
        result *= float(_u32(x))
    return result


@dataclass
class ArrayNode:
    """A list node holding an integer array, a category byte and the next node."""

    values: list[int] = field(default_factory=list)
    category: int = 0
    next: ArrayNode | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.category <= 0xFF:
            raise ValueError(f"category must fit in a byte: {self.category!r}")

    @property
    def length(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[ArrayNode]:
        node: ArrayNode | None = self
        while node is not None:
            yield node
            node = node.next


def total_length(head: ArrayNode | None) -> int:
    """Return the summed array lengths of the list starting at ``head``, wrapped to 32 bits."""
    if head is None:
        return 0
    return sum(node.length for node in head) & U32_MASK


def str_cmp(a: str, b: str) -> int:
    """Compare lexicographically: 0 if equal, 1 if ``a < b``, -1 if ``a > b``."""
    if a == b:
        return 0
    return 1 if a < b else -1


def str_len(a: str) -> int:
    """Return the number of characters of ``a``."""
    return len(a)


def str_print(a: str, stream: TextIO | None = None) -> None:
    """Write ``a`` to ``stream`` (standard output by default); write ``NULL`` if empty."""
    out = sys.stdout if stream is None else stream
    out.write(a if a else "NULL")