import h5py
import numpy as np
from tqdm import tqdm

from hsicube.cube import DataCube


def write_cube_hdf(
        path_file_hdf5: str,
        cube: DataCube,
        name: str = 'cube',
        dtype=None,
        show_progress: bool = False
) -> None:
    """Store a cube as (rows, cols, bands) dataset, chunked row-wise."""
    values = cube.as_array()
    if dtype is None:
        dtype = values.dtype

    with h5py.File(path_file_hdf5, 'a') as hdf:
        if name in hdf:
            del hdf[name]
        dset = hdf.create_dataset(
            name=name,
            dtype=dtype,
            shape=cube.shape,
            chunks=(1, max(1, round(np.sqrt(cube.num_cols))), max(1, round(np.sqrt(cube.num_bands))))
        )
        for i in tqdm(range(cube.num_rows), desc='writing hdf', disable=not show_progress):
            dset[i, :, :] = values[i, :, :].astype(dtype)

        dset.attrs['interleave'] = cube.interleave.value
        dset.attrs['data type'] = cube.data_type.token


def read_cube_hdf(path_file_hdf5: str, name: str = 'cube') -> np.ndarray:
    with h5py.File(path_file_hdf5, 'r') as hdf:
        return np.asarray(hdf[name])
