from enum import Enum
from typing import BinaryIO

import numpy as np

from hsicube.errors import CubeIOError, FormatError


class DataType(Enum):
    """Element types of a cube. Values are (name, numpy type, ENVI code)."""
    BYTE = ('byte', np.uint8, 1)
    INT16 = ('int16', np.int16, 2)
    INT32 = ('int32', np.int32, 3)
    FLOAT32 = ('float32', np.float32, 4)
    FLOAT64 = ('float64', np.float64, 5)
    UINT16 = ('uint16', np.uint16, 12)
    UINT32 = ('uint32', np.uint32, 13)
    UINT64 = ('uint64', np.uint64, 15)
    #  platform unsigned long, fixed to 8 bytes; has no ENVI code
    ULONG = ('ulong', np.uint64, None)

    @property
    def token(self) -> str:
        return self.value[0]

    @property
    def code(self) -> int | None:
        return self.value[2]

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype in host byte order"""
        return np.dtype(self.value[1])

    @property
    def width(self) -> int:
        return self.dtype.itemsize

    @classmethod
    def from_token(cls, token) -> 'DataType':
        """Accepts an ENVI numeric code or a type name, e.g. '4', 'float' or 'float32'."""
        token = str(token).strip().lower()
        try:
            return _DATA_TYPE_TOKENS[token]
        except KeyError:
            raise FormatError(f'unsupported/unknown data type: {token!r}') from None


_DATA_TYPE_TOKENS: dict[str, DataType] = {
    **{str(t.code): t for t in DataType if t.code is not None},
    **{t.token: t for t in DataType},
    'float': DataType.FLOAT32,
    'double': DataType.FLOAT64,
    'unsigned long': DataType.ULONG,
}


def width(data_type: DataType) -> int:
    return data_type.width


def host_is_big_endian() -> bool:
    """Probe the host byte order with the bit pattern of an unsigned 1.

    The lowest-addressed byte of uint32(1) is 0 on a big-endian machine.
    """
    probe = np.array([1], dtype=np.uint32).view(np.uint8)
    return bool(probe[0] != 1)


def reverse(buffer: bytearray, width: int) -> None:
    """Reverse the byte order of the first `width` bytes of buffer in place."""
    for i in range(width // 2):
        j = width - 1 - i
        buffer[i], buffer[j] = buffer[j], buffer[i]


def read_element(file: BinaryIO, width: int, reverse_needed: bool) -> bytes:
    """Read one element from the current file position, returned in host order."""
    buffer = bytearray(file.read(width))
    if len(buffer) != width:
        raise CubeIOError(f'unexpected end of file after {file.tell()} bytes')
    if reverse_needed:
        reverse(buffer, width)
    return bytes(buffer)


def write_element(data: bytes, width: int, reverse_needed: bool) -> bytes:
    """Bring one host ordered element back into file order."""
    buffer = bytearray(data[:width])
    if reverse_needed:
        reverse(buffer, width)
    return bytes(buffer)


def _reverse_run(data: bytes, width: int) -> bytes:
    # view consecutive elements as rows and flip each row
    elements = np.frombuffer(data, dtype=np.uint8).reshape((-1, width))
    return elements[:, ::-1].tobytes()


def read_run(file: BinaryIO, width: int, count: int, reverse_needed: bool) -> bytes:
    """Read `count` consecutive elements, each reversed like read_element."""
    num_bytes = width * count
    data = file.read(num_bytes)
    if len(data) != num_bytes:
        raise CubeIOError(
            f'unexpected end of file: wanted {num_bytes} bytes, got {len(data)}'
        )
    if reverse_needed and width > 1:
        return _reverse_run(data, width)
    return data


def write_run(data: bytes, width: int, reverse_needed: bool) -> bytes:
    if reverse_needed and width > 1:
        return _reverse_run(data, width)
    return bytes(data)
