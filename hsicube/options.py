import logging
import os
from dataclasses import dataclass, replace

from hsicube.errors import ConfigError
from hsicube.raw.addressing import Interleave
from hsicube.raw.codec import DataType
from hsicube.raw.header import read_config

logger = logging.getLogger(__name__)

# https://www.nv5geospatialsoftware.com/docs/ENVIHeaderFiles.html
BYTE_ORDER = {
    False: '0',
    True: '1'
}


def _parse_int(values: dict, key: str) -> int:
    try:
        return int(values[key])
    except ValueError:
        raise ConfigError(f'{key!r} must be an integer, got {values[key]!r}') from None


def _row_col_keys(interleave: Interleave) -> tuple[str, str]:
    """Header keys holding the number of rows and columns."""
    # for bsq, samples run along the rows
    if interleave is Interleave.BSQ:
        return 'samples', 'lines'
    return 'lines', 'samples'


@dataclass(frozen=True)
class DataOptions:
    """Location and layout of a cube on disk.

    The dimensions describe the entire file, not the part of it that is read.
    header_offset counts elements, not bytes.
    """
    file_path: str = ''
    interleave: Interleave = Interleave.BSQ
    data_type: DataType = DataType.FLOAT32
    big_endian: bool = False
    header_offset: int = 0
    num_rows: int = 0
    num_cols: int = 0
    num_bands: int = 0

    @classmethod
    def from_config(cls, path_file_config: str, base: 'DataOptions' = None) -> 'DataOptions':
        return cls._from_config(path_file_config, base, visited=set())

    @classmethod
    def _from_config(cls, path_file_config: str, base, visited: set) -> 'DataOptions':
        key = os.path.realpath(path_file_config)
        if key in visited:
            raise ConfigError(f'header files refer to each other in a cycle: {path_file_config}')
        visited.add(key)

        values = read_config(path_file_config)
        if not values:
            raise ConfigError(f'no header values available in {path_file_config}')
        return cls.from_config_map(values, base=base, visited=visited)

    @classmethod
    def from_config_map(
            cls,
            values: dict[str, str],
            base: 'DataOptions' = None,
            visited: set = None
    ) -> 'DataOptions':
        """Options from header values. Keys that are not set keep the values of base."""
        options = cls() if base is None else base
        if visited is None:
            visited = set()

        if 'data' in values:
            options = replace(options, file_path=values['data'])

        # a config file can point to the header that holds the actual metadata
        if 'header' in values:
            logger.info(f'reading header info from {values["header"]}')
            return cls._from_config(values['header'], options, visited)

        updates = {}
        if 'interleave' in values:
            updates['interleave'] = Interleave.from_token(values['interleave'])
        if 'data type' in values:
            updates['data_type'] = DataType.from_token(values['data type'])
        if 'byte order' in values:
            updates['big_endian'] = values['byte order'] == '1'
        if 'header offset' in values:
            updates['header_offset'] = _parse_int(values, 'header offset')

        key_rows, key_cols = _row_col_keys(updates.get('interleave', options.interleave))
        if key_rows in values:
            updates['num_rows'] = _parse_int(values, key_rows)
        if key_cols in values:
            updates['num_cols'] = _parse_int(values, key_cols)
        if 'bands' in values:
            updates['num_bands'] = _parse_int(values, 'bands')

        for name, value in updates.items():
            logger.info(f'option set: {name} = {value}')
        return replace(options, **updates)

    @classmethod
    def for_cube(cls, cube, file_path: str, big_endian: bool = False) -> 'DataOptions':
        """Options describing a file that holds exactly the given cube."""
        return cls(
            file_path=file_path,
            interleave=cube.interleave,
            data_type=cube.data_type,
            big_endian=big_endian,
            header_offset=0,
            num_rows=cube.num_rows,
            num_cols=cube.num_cols,
            num_bands=cube.num_bands
        )

    def to_config(self) -> dict[str, str]:
        """Header values that load back into these options."""
        key_rows, key_cols = _row_col_keys(self.interleave)
        values = {
            'data': self.file_path,
            'interleave': self.interleave.value,
            'data type': self.data_type.token,
            'byte order': BYTE_ORDER[self.big_endian],
            'header offset': str(self.header_offset),
            key_rows: str(self.num_rows),
            key_cols: str(self.num_cols),
            'bands': str(self.num_bands),
        }
        return values

    @property
    def shape(self) -> tuple[int, int, int]:
        return self.num_rows, self.num_cols, self.num_bands

    def validate(self) -> None:
        for name, size in zip(('rows', 'columns', 'bands'), self.shape):
            if size <= 0:
                raise ConfigError(f'number of {name} must be positive, got {size}')
        if self.header_offset < 0:
            raise ConfigError(f'header offset must not be negative, got {self.header_offset}')


@dataclass(frozen=True)
class DataRange:
    """Sub-cube to read. start values are inclusive, end values exclusive."""
    start_row: int = 0
    end_row: int = 0
    start_col: int = 0
    end_col: int = 0
    start_band: int = 0
    end_band: int = 0

    @classmethod
    def from_config(cls, path_file_config: str) -> 'DataRange':
        values = read_config(path_file_config)
        if not values:
            raise ConfigError(f'no range values available in {path_file_config}')
        return cls.from_config_map(values)

    @classmethod
    def from_config_map(cls, values: dict[str, str]) -> 'DataRange':
        fields = {}
        for key in ('start row', 'end row', 'start col', 'end col', 'start band', 'end band'):
            if key in values:
                fields[key.replace(' ', '_')] = _parse_int(values, key)
        return cls(**fields)

    @classmethod
    def full(cls, options: DataOptions) -> 'DataRange':
        return cls(0, options.num_rows, 0, options.num_cols, 0, options.num_bands)

    @property
    def rows(self) -> range:
        return range(self.start_row, self.end_row)

    @property
    def cols(self) -> range:
        return range(self.start_col, self.end_col)

    @property
    def bands(self) -> range:
        return range(self.start_band, self.end_band)

    @property
    def shape(self) -> tuple[int, int, int]:
        return (
            self.end_row - self.start_row,
            self.end_col - self.start_col,
            self.end_band - self.start_band
        )
