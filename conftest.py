import numpy as np
import pytest

from hsicube.options import DataOptions
from hsicube.raw.addressing import Interleave
from hsicube.raw.codec import DataType


def to_file_order(values: np.ndarray, interleave: Interleave) -> np.ndarray:
    """(rows, cols, bands) array transposed into the order of the file"""
    if interleave is Interleave.BSQ:
        return values.transpose(2, 0, 1)
    if interleave is Interleave.BIL:
        return values.transpose(0, 2, 1)
    return values


def write_raw(
        path_file: str,
        values: np.ndarray,
        interleave: Interleave,
        big_endian: bool = False,
        header_offset: int = 0
) -> None:
    dtype = values.dtype.newbyteorder('>' if big_endian else '<')
    with open(path_file, 'wb') as f:
        f.write(b'\xab' * (header_offset * dtype.itemsize))
        np.ascontiguousarray(to_file_order(values, interleave)).astype(dtype).tofile(f)


def make_values(shape, data_type: DataType) -> np.ndarray:
    """Distinct values per element, so that misplaced elements are noticed."""
    num = int(np.prod(shape))
    values = np.arange(num)
    if data_type is DataType.BYTE:
        values = values % 251
    elif np.issubdtype(data_type.dtype, np.signedinteger):
        values = values - num // 2
    elif np.issubdtype(data_type.dtype, np.floating):
        values = values * 0.25 - 3.5
    else:
        values = values * 257 + 1
    return values.astype(data_type.dtype).reshape(shape)


@pytest.fixture
def make_cube_file(tmp_path):
    """Factory writing a cube to disk. Returns the options describing it and the values."""
    def _make(
            shape=(5, 4, 3),
            interleave=Interleave.BSQ,
            data_type=DataType.FLOAT32,
            big_endian=False,
            header_offset=0,
            name='cube.raw'
    ):
        values = make_values(shape, data_type)
        path_file = str(tmp_path / name)
        write_raw(path_file, values, interleave, big_endian, header_offset)
        options = DataOptions(
            file_path=path_file,
            interleave=interleave,
            data_type=data_type,
            big_endian=big_endian,
            header_offset=header_offset,
            num_rows=shape[0],
            num_cols=shape[1],
            num_bands=shape[2]
        )
        return options, values
    return _make
