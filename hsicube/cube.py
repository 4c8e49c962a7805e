import logging

import numpy as np

from hsicube.errors import BoundsError
from hsicube.raw.addressing import Interleave, linear_index
from hsicube.raw.codec import DataType

logger = logging.getLogger(__name__)

# wide enough for every DataType
SCALAR_CAPACITY = 8


class Scalar:
    """A single cube value: raw host ordered bytes tagged with their DataType."""
    __slots__ = ('data_type', 'raw')

    def __init__(self, data_type: DataType, raw: bytes = b''):
        if len(raw) > SCALAR_CAPACITY:
            raise ValueError(f'a scalar holds at most {SCALAR_CAPACITY} bytes, got {len(raw)}')
        self.data_type: DataType = data_type
        self.raw: bytes = bytes(raw).ljust(SCALAR_CAPACITY, b'\x00')

    @classmethod
    def zero(cls, data_type: DataType) -> 'Scalar':
        return cls(data_type)

    @property
    def value(self):
        """The value as numpy scalar of the tagged type"""
        return np.frombuffer(self.raw, dtype=self.data_type.dtype, count=1)[0]

    def __float__(self):
        return float(self.value)

    def __int__(self):
        return int(self.value)

    def __eq__(self, other):
        if not isinstance(other, Scalar):
            return NotImplemented
        return (self.data_type is other.data_type) and (self.raw == other.raw)

    def __hash__(self):
        return hash((self.data_type, self.raw))

    def __repr__(self):
        return f'Scalar({self.data_type.token}, {self.value!r})'


class DataCube:
    """Sub-cube held in memory.

    raw_bytes are in host byte order and laid out according to interleave,
    using the cube's own dimensions (not those of the file it came from).
    """
    def __init__(
            self,
            num_rows: int,
            num_cols: int,
            num_bands: int,
            interleave: Interleave,
            data_type: DataType,
            raw_bytes: bytes | bytearray
    ):
        for name, size in zip(('rows', 'columns', 'bands'), (num_rows, num_cols, num_bands)):
            if size <= 0:
                raise ValueError(f'number of {name} must be positive, got {size}')
        self.num_rows: int = int(num_rows)
        self.num_cols: int = int(num_cols)
        self.num_bands: int = int(num_bands)
        self.interleave: Interleave = interleave
        self.data_type: DataType = data_type

        self._raw_bytes: bytes = b''
        self.replace(raw_bytes)

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.num_rows, self.num_cols, self.num_bands

    @property
    def width(self) -> int:
        return self.data_type.width

    @property
    def nbytes(self) -> int:
        return self.num_rows * self.num_cols * self.num_bands * self.width

    @property
    def raw_bytes(self) -> bytes:
        return self._raw_bytes

    def replace(self, raw_bytes: bytes | bytearray) -> None:
        """Swap in new (host ordered) contents of the same size."""
        if len(raw_bytes) != self.nbytes:
            raise ValueError(
                f'expected {self.nbytes} bytes for a {self.shape} cube of '
                f'{self.data_type.token}, got {len(raw_bytes)}'
            )
        self._raw_bytes = bytes(raw_bytes)

    def _check_index(self, row: int, col: int, band: int) -> str | None:
        for name, idx, size in zip(('row', 'column', 'band'), (row, col, band), self.shape):
            if (idx < 0) or (idx >= size):
                return f'{name} index out of range: {idx} must be between 0 and {size - 1}'
        return None

    def get_value(self, row: int, col: int, band: int, strict: bool = False) -> Scalar:
        """Value at (row, col, band).

        Out of range indices are logged and give a zero scalar, unless strict
        is set, in which case a BoundsError is raised.
        """
        message = self._check_index(row, col, band)
        if message is not None:
            if strict:
                raise BoundsError(message)
            logger.warning(message)
            return Scalar.zero(self.data_type)

        width = self.width
        offset = linear_index(self.interleave, self.shape, row, col, band) * width
        return Scalar(self.data_type, self._raw_bytes[offset:offset + width])

    def get_spectrum(self, row: int, col: int) -> list[Scalar]:
        return [self.get_value(row, col, band) for band in range(self.num_bands)]

    def get_spectrum_values(self, row: int, col: int) -> np.ndarray:
        """Spectrum at a pixel as float64 array"""
        return np.array([float(v) for v in self.get_spectrum(row, col)], dtype=np.float64)

    def as_array(self) -> np.ndarray:
        """Read-only (rows, cols, bands) view of the cube."""
        values = np.frombuffer(self._raw_bytes, dtype=self.data_type.dtype)
        if self.interleave is Interleave.BSQ:
            return values.reshape((self.num_bands, self.num_rows, self.num_cols)).transpose(1, 2, 0)
        if self.interleave is Interleave.BIL:
            return values.reshape((self.num_rows, self.num_bands, self.num_cols)).transpose(0, 2, 1)
        return values.reshape(self.shape)

    def get_band_image(self, band: int) -> np.ndarray:
        """2D (rows, cols) image of a single band"""
        if (band < 0) or (band >= self.num_bands):
            raise BoundsError(f'band index out of range: {band} must be between 0 and {self.num_bands - 1}')
        return self.as_array()[:, :, band]

    def __repr__(self):
        return (f'DataCube(shape={self.shape}, interleave={self.interleave.value}, '
                f'data_type={self.data_type.token})')
