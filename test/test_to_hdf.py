import h5py
import numpy as np

from hsicube.options import DataRange
from hsicube.raw.addressing import Interleave
from hsicube.raw.codec import DataType
from hsicube.raw.reader import DataReader
from hsicube.to_hdf import read_cube_hdf, write_cube_hdf


def test_write_cube_hdf(make_cube_file, tmp_path):
    options, values = make_cube_file((4, 5, 3), Interleave.BSQ, DataType.INT16, big_endian=True)
    cube = DataReader(options).read(DataRange(1, 4, 0, 5, 0, 2))
    path_file_hdf5 = str(tmp_path / 'cube.hdf5')

    write_cube_hdf(path_file_hdf5, cube)
    assert np.array_equal(read_cube_hdf(path_file_hdf5), values[1:4, :, 0:2])

    with h5py.File(path_file_hdf5, 'r') as hdf:
        assert hdf['cube'].attrs['interleave'] == 'bsq'
        assert hdf['cube'].attrs['data type'] == 'int16'


def test_overwrite_dataset_with_other_dtype(make_cube_file, tmp_path):
    options, values = make_cube_file((2, 3, 4), Interleave.BIP, DataType.UINT16)
    cube = DataReader(options).read_all()
    path_file_hdf5 = str(tmp_path / 'cube.hdf5')

    write_cube_hdf(path_file_hdf5, cube, name='roi')
    write_cube_hdf(path_file_hdf5, cube, name='roi', dtype=np.float32, show_progress=True)

    stored = read_cube_hdf(path_file_hdf5, name='roi')
    assert stored.dtype == np.float32
    np.testing.assert_array_equal(stored, values.astype(np.float32))
