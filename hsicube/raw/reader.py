import logging

from tqdm import tqdm

from hsicube.cube import DataCube
from hsicube.errors import CubeIOError, RangeError
from hsicube.options import DataOptions, DataRange
from hsicube.raw.addressing import Interleave, linear_index, num_outer_steps, run_starts
from hsicube.raw.codec import host_is_big_endian, read_run, write_run
from hsicube.raw.header import write_config

logger = logging.getLogger(__name__)


class DataReader:
    """Reads rectangular sub-cubes from a raw BSQ, BIL or BIP file.

    Only the requested sub-cube is held in memory. Values are converted to
    the byte order of the host while reading and back to the byte order of
    the file while writing.
    """
    options: DataOptions = None
    #  determined once per reader
    _host_big_endian: bool = None
    #  result of the last successful read
    _cube: DataCube = None

    def __init__(self, options: DataOptions):
        self.options: DataOptions = options
        self._host_big_endian: bool = host_is_big_endian()

    @classmethod
    def from_config(cls, path_file_config: str):
        return cls(DataOptions.from_config(path_file_config))

    @property
    def host_big_endian(self) -> bool:
        return self._host_big_endian

    @property
    def reverse_needed(self) -> bool:
        return self.options.big_endian != self._host_big_endian

    @property
    def cube(self) -> DataCube | None:
        return self._cube

    def _check_range(self, data_range: DataRange) -> None:
        axes = (
            ('row', data_range.start_row, data_range.end_row, self.options.num_rows),
            ('column', data_range.start_col, data_range.end_col, self.options.num_cols),
            ('band', data_range.start_band, data_range.end_band, self.options.num_bands),
        )
        for name, start, end, size in axes:
            if (start < 0) or (end > size):
                raise RangeError(
                    f'invalid {name} range [{start}, {end}): must be between 0 and {size}'
                )
        for name, start, end, _ in axes:
            if end - start <= 0:
                raise RangeError(f'{name} range must be positive, got [{start}, {end})')

    def read(self, data_range: DataRange, show_progress: bool = False) -> DataCube:
        """Read the sub-cube in data_range. The file is traversed in its physical order."""
        self.options.validate()
        self._check_range(data_range)

        interleave = self.options.interleave
        data_type = self.options.data_type
        width = data_type.width
        shape_file = self.options.shape
        num_rows, num_cols, num_bands = data_range.shape

        num_bytes = num_rows * num_cols * num_bands * width
        raw = bytearray(num_bytes)
        reverse_needed = self.reverse_needed

        rows, cols, bands = data_range.rows, data_range.cols, data_range.bands
        logger.info(
            f'reading {data_range.shape} of {shape_file} ({interleave.value}, '
            f'{data_type.token}) from {self.options.file_path}'
        )
        try:
            with open(self.options.file_path, 'rb') as f:
                # index of the element the file position currently follows
                previous_index = None
                position = 0
                for (row, col, band), length in tqdm(
                        run_starts(interleave, rows, cols, bands),
                        total=num_outer_steps(interleave, rows, cols, bands),
                        desc=f'reading {self.options.file_path}',
                        disable=not show_progress
                ):
                    index = self.options.header_offset + linear_index(
                        interleave, shape_file, row, col, band
                    )
                    # only seek when the run does not continue where the last one ended
                    if (previous_index is None) or (index != previous_index + 1):
                        f.seek(index * width)
                    run = read_run(f, width, length, reverse_needed)
                    raw[position:position + len(run)] = run
                    position += len(run)
                    previous_index = index + length - 1
        except CubeIOError:
            raise
        except OSError as e:
            raise CubeIOError(
                f"file '{self.options.file_path}' could not be read"
            ) from e

        self._cube = DataCube(
            num_rows=num_rows,
            num_cols=num_cols,
            num_bands=num_bands,
            interleave=interleave,
            data_type=data_type,
            raw_bytes=raw
        )
        return self._cube

    def read_all(self, show_progress: bool = False) -> DataCube:
        return self.read(DataRange.full(self.options), show_progress=show_progress)

    def write(self, cube: DataCube, path_file: str, path_file_header: str = None) -> None:
        """Write the cube in its stored order with the byte order of this reader's file.

        Reading the written file with DataOptions.for_cube gives back the same cube.
        If path_file_header is given, a header describing the written file is added.
        """
        width = cube.width
        reverse_needed = self.reverse_needed
        # one run per line of the innermost axis
        run_bytes = (cube.num_bands if cube.interleave is Interleave.BIP else cube.num_cols) * width
        raw = cube.raw_bytes

        logger.info(f'writing {cube.shape} cube to {path_file}')
        try:
            with open(path_file, 'wb') as f:
                for start in range(0, len(raw), run_bytes):
                    f.write(write_run(raw[start:start + run_bytes], width, reverse_needed))
        except OSError as e:
            raise CubeIOError(f"file '{path_file}' could not be opened for writing") from e

        if path_file_header is not None:
            options = DataOptions.for_cube(cube, path_file, big_endian=self.options.big_endian)
            write_config(path_file_header, options.to_config())
