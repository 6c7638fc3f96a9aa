"""Quadtree tile addressing and its numeric and string encodings.

This module provides the TileKey value type used to address a tile in a
recursive 4-way subdivision of the map. A tile is identified by a row, a
column, and a level. Level 0 holds the single root tile; every level below
splits each tile into four children, so a level holds ``2 ** level`` rows
and ``2 ** level`` columns.

Two alternative representations are supported:

- Quadkey strings: one base-4 digit per level from the root downwards,
  digit = ``2 * row_bit + column_bit``. The root tile renders as ``"-"``.
- Morton codes: the row and column bits interleaved (column bits on even
  positions, row bits on odd positions) below a marker bit at position
  ``2 * level``. Codes of level ``L`` therefore occupy ``[4**L, 2 * 4**L)``,
  which partitions the code space by level.

Levels are bounded to MAX_LEVEL so that Morton codes stay exactly
representable as IEEE-754 doubles on the platform side.

Example:
    Convert between the representations:
        >>> from olp_sdk.utils.tile_key import TileKey
        >>> key = TileKey.from_row_column_level(3275, 8085, 13)
        >>> key.to_quad_key_string()
        '1331132012123'
        >>> key.to_morton_code()
        100000155
        >>> TileKey.from_morton_code(100000155) == key
        True
"""

from __future__ import annotations

import dataclasses
from typing import Protocol

MAX_LEVEL = 26
MAX_SUB_LEVELS = 16
ROOT_QUAD_KEY = "-"

_QUAD_DIGITS = frozenset("0123")


class InvalidTileKeyError(ValueError):
    """Raised when a tile address or one of its encodings is malformed.

    Covers out-of-range rows, columns and levels, quadkey strings with
    characters outside ``0-3``, Morton codes without a valid level marker,
    and unsupported sub-tile depths.
    """


class QuadKey(Protocol):
    """Anything that exposes a row, a column and a level in a quadtree."""

    @property
    def row(self) -> int: ...

    @property
    def column(self) -> int: ...

    @property
    def level(self) -> int: ...


def _check_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidTileKeyError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    return value


@dataclasses.dataclass(frozen=True)
class TileKey:
    """Immutable address of a tile in a quadtree.

    Instances are validated on construction and never mutated; every
    transformation returns a new TileKey. Prefer the ``from_*`` factories
    over calling the constructor directly.

    Attributes:
        row: Row of the tile, ``0 <= row < 2 ** level``.
        column: Column of the tile, ``0 <= column < 2 ** level``.
        level: Depth in the tree, ``0 <= level <= MAX_LEVEL``.

    Raises:
        InvalidTileKeyError: If any coordinate is out of range for the level.

    Example:
        Walk the tree:
            >>> key = TileKey.from_row_column_level(2, 3, 2)
            >>> key.added_sub_key("31")
            TileKey(row=10, column=15, level=4)
            >>> key.parent()
            TileKey(row=1, column=1, level=1)
    """

    row: int
    column: int
    level: int

    def __post_init__(self) -> None:
        row = _check_int("row", self.row)
        column = _check_int("column", self.column)
        level = _check_int("level", self.level)
        if not 0 <= level <= MAX_LEVEL:
            raise InvalidTileKeyError(
                f"level {level} is outside [0, {MAX_LEVEL}]"
            )
        size = 1 << level
        if not 0 <= row < size:
            raise InvalidTileKeyError(
                f"row {row} is outside [0, {size}) for level {level}"
            )
        if not 0 <= column < size:
            raise InvalidTileKeyError(
                f"column {column} is outside [0, {size}) for level {level}"
            )

    @classmethod
    def from_row_column_level(cls, row: int, column: int, level: int) -> TileKey:
        """Create a tile key from its coordinates.

        Args:
            row: The requested row. Must be less than 2 to the power of level.
            column: The requested column. Must be less than 2 to the power
                of level.
            level: The requested level, between 0 and MAX_LEVEL.

        Returns:
            A validated TileKey.

        Raises:
            InvalidTileKeyError: If the coordinates are out of range.
        """
        return cls(row, column, level)

    @classmethod
    def from_quad_key(cls, quad_key: QuadKey) -> TileKey:
        """Create a tile key from any object following the QuadKey protocol."""
        return cls(quad_key.row, quad_key.column, quad_key.level)

    @classmethod
    def from_quad_key_string(cls, key: str) -> TileKey:
        """Create a tile key from its base-4 quadkey string.

        The string is the inverse of to_quad_key_string(): ``"-"`` is the
        root tile, any other string has one digit in ``0-3`` per level.

        Args:
            key: Quadkey string to decode.

        Returns:
            The decoded TileKey.

        Raises:
            InvalidTileKeyError: If the string is empty, too long, or contains
                characters other than ``0-3``.

        Example:
            >>> TileKey.from_quad_key_string("32")
            TileKey(row=3, column=2, level=2)
        """
        if key == ROOT_QUAD_KEY:
            return cls(0, 0, 0)
        if not key or not _QUAD_DIGITS.issuperset(key):
            raise InvalidTileKeyError(f"malformed quadkey string {key!r}")
        if len(key) > MAX_LEVEL:
            raise InvalidTileKeyError(
                f"quadkey {key!r} is deeper than level {MAX_LEVEL}"
            )

        row = 0
        column = 0
        for char in key:
            digit = int(char)
            row = (row << 1) | (digit >> 1)
            column = (column << 1) | (digit & 0x1)
        return cls(row, column, len(key))

    @classmethod
    def from_morton_code(cls, code: int) -> TileKey:
        """Create a tile key from its numeric Morton code.

        The level is read from the position of the marker bit; the bits
        below it are de-interleaved into column (even) and row (odd) bits.

        Args:
            code: Morton code produced by to_morton_code().

        Returns:
            The decoded TileKey.

        Raises:
            InvalidTileKeyError: If the code is not positive, its marker bit
                sits on an odd position, or it encodes a level deeper than
                MAX_LEVEL.
        """
        code = _check_int("morton code", code)
        if code < 1:
            raise InvalidTileKeyError(f"morton code {code} must be positive")
        marker = code.bit_length() - 1
        if marker % 2:
            raise InvalidTileKeyError(
                f"morton code {code} has no valid level marker"
            )
        level = marker // 2
        if level > MAX_LEVEL:
            raise InvalidTileKeyError(
                f"morton code {code} encodes level {level} > {MAX_LEVEL}"
            )

        row = 0
        column = 0
        for i in range(level):
            column |= ((code >> (2 * i)) & 0x1) << i
            row |= ((code >> (2 * i + 1)) & 0x1) << i
        return cls(row, column, level)

    @staticmethod
    def columns_count(level: int) -> int:
        """Return the number of columns at ``level``, i.e. 2 to the power of it."""
        return 1 << level

    @staticmethod
    def rows_count(level: int) -> int:
        """Return the number of rows at ``level``, i.e. 2 to the power of it."""
        return 1 << level

    def equals(self, other: TileKey) -> bool:
        """Return True if ``other`` has identical row, column and level."""
        return (
            self.row == other.row
            and self.column == other.column
            and self.level == other.level
        )

    def parent(self) -> TileKey:
        """Return the tile one level up. The root is its own parent."""
        return self.changed_level_by(-1)

    def changed_level_by(self, delta: int) -> TileKey:
        """Return the tile at a level that differs from this one by ``delta``.

        A positive delta descends to the top-left descendant (row and column
        shifted left, zero-filled). A negative delta ascends to the ancestor
        and is lossy: ``k.changed_level_by(d).changed_level_by(-d) == k``
        holds for ``d > 0``, but not the other way around. Ascending past the
        root clamps at level 0.

        Args:
            delta: Difference between the requested and the current level.

        Returns:
            The TileKey at the new level.

        Raises:
            InvalidTileKeyError: If the resulting level exceeds MAX_LEVEL.
        """
        if delta == 0:
            return self
        level = max(0, self.level + delta)
        if delta > 0:
            return TileKey(self.row << delta, self.column << delta, level)
        return TileKey(self.row >> -delta, self.column >> -delta, level)

    def added_sub_key(self, sub: str) -> TileKey:
        """Return the absolute tile addressed by a quadkey relative to this one.

        Each digit of ``sub`` is applied as one child step. An empty string
        or ``"-"`` addresses this tile itself.

        Args:
            sub: Relative quadkey string.

        Returns:
            The descendant TileKey.
        """
        sub_key = TileKey.from_quad_key_string(sub or ROOT_QUAD_KEY)
        child = self.changed_level_by(sub_key.level)
        return TileKey(
            child.row + sub_key.row,
            child.column + sub_key.column,
            child.level,
        )

    def to_quad_key_string(self) -> str:
        """Convert the tile key into its base-4 quadkey string.

        Returns:
            ``"-"`` for the root tile. Otherwise a string with one digit per
            level; dropping the last digit yields the parent's quadkey, and
            appending ``0-3`` yields the children.
        """
        if self.level == 0:
            return ROOT_QUAD_KEY
        digits = []
        for shift in range(self.level - 1, -1, -1):
            row_bit = (self.row >> shift) & 0x1
            column_bit = (self.column >> shift) & 0x1
            digits.append(str(2 * row_bit + column_bit))
        return "".join(digits)

    def to_morton_code(self) -> int:
        """Convert the tile key into its numeric Morton code."""
        result = 1 << (2 * self.level)
        for i in range(self.level):
            result |= ((self.column >> i) & 0x1) << (2 * i)
            result |= ((self.row >> i) & 0x1) << (2 * i + 1)
        return result

    def to_here_tile(self) -> str:
        """Return the Morton code as a decimal string, as used in REST calls."""
        return str(self.to_morton_code())

    def get_sub_here_tile(self, delta: int) -> str:
        """Return the sub-tile code of this tile relative to an ancestor.

        The result keeps the lowest ``delta`` levels of the Morton code under
        a fresh marker bit, so one-level sub-tiles are numbered 4 to 7.

        Args:
            delta: Number of levels between this tile and the ancestor.
                Must be within ``[0, level]`` and below MAX_SUB_LEVELS.

        Returns:
            The decimal string of the relative code.

        Raises:
            InvalidTileKeyError: If ``delta`` is out of range.

        Example:
            >>> TileKey.from_row_column_level(3, 3, 2).get_sub_here_tile(1)
            '7'
        """
        delta = _check_int("delta", delta)
        if not 0 <= delta <= self.level or delta >= MAX_SUB_LEVELS:
            raise InvalidTileKeyError(
                f"sub tile delta {delta} is outside [0, "
                f"{min(self.level, MAX_SUB_LEVELS - 1)}]"
            )
        msb = 1 << (2 * delta)
        return str((self.to_morton_code() & (msb - 1)) | msb)
