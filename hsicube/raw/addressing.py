"""Index arithmetic for the three interleave formats.

BSQ = band sequential: band > row > col
BIL = band interleaved by line: row > band > col
BIP = band interleaved by pixel: row > col > band

The same formulas address the full cube on disk and the sub-cube in memory,
they only differ in the shape they are given.
"""
from enum import Enum
from typing import Iterator

from hsicube.errors import FormatError

Shape = tuple[int, int, int]


class Interleave(Enum):
    BSQ = 'bsq'
    BIL = 'bil'
    BIP = 'bip'

    @classmethod
    def from_token(cls, token: str) -> 'Interleave':
        try:
            return cls(str(token).strip().lower())
        except ValueError:
            raise FormatError(f'unsupported/unknown data interleave format: {token!r}') from None


def linear_index(interleave: Interleave, shape: Shape, row: int, col: int, band: int) -> int:
    """Position of element (row, col, band) in a cube of the given (rows, cols, bands) shape."""
    num_rows, num_cols, num_bands = shape
    if interleave is Interleave.BSQ:
        return band * (num_rows * num_cols) + row * num_cols + col
    if interleave is Interleave.BIL:
        return row * (num_bands * num_cols) + band * num_cols + col
    if interleave is Interleave.BIP:
        return row * (num_bands * num_cols) + col * num_bands + band
    raise FormatError(f'unsupported/unknown data interleave format: {interleave!r}')


def traversal_order(
        interleave: Interleave,
        rows: range,
        cols: range,
        bands: range
) -> Iterator[tuple[int, int, int]]:
    """Yields (row, col, band) in the order the elements are laid out on disk."""
    for (row, col, band), length in run_starts(interleave, rows, cols, bands):
        for step in range(length):
            if interleave is Interleave.BIP:
                yield row, col, band + step
            else:
                yield row, col + step, band


def run_starts(
        interleave: Interleave,
        rows: range,
        cols: range,
        bands: range
) -> Iterator[tuple[tuple[int, int, int], int]]:
    """Like traversal_order, but with the innermost axis collapsed.

    The innermost axis (col for BSQ and BIL, band for BIP) has stride 1 in
    every format, so each yielded start coordinate begins a contiguous run of
    `length` elements.
    """
    if interleave is Interleave.BSQ:
        for band in bands:
            for row in rows:
                yield (row, cols.start, band), len(cols)
    elif interleave is Interleave.BIL:
        for row in rows:
            for band in bands:
                yield (row, cols.start, band), len(cols)
    elif interleave is Interleave.BIP:
        for row in rows:
            for col in cols:
                yield (row, col, bands.start), len(bands)
    else:
        raise FormatError(f'unsupported/unknown data interleave format: {interleave!r}')


def num_outer_steps(interleave: Interleave, rows: range, cols: range, bands: range) -> int:
    """Number of runs yielded by run_starts"""
    if interleave is Interleave.BIP:
        return len(rows) * len(cols)
    return len(rows) * len(bands)
