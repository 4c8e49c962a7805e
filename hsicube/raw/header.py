import logging
from typing import Iterable

from hsicube.errors import ConfigError, CubeIOError

logger = logging.getLogger(__name__)


def parse_config_lines(lines: Iterable[str]) -> dict[str, str]:
    """Parse 'key = value' lines. The last occurrence of a key wins."""
    attrs = {}
    for line in lines:
        if line.lstrip().startswith('#'):
            continue
        # lines without a key are not entries
        if line.find('=') <= 0:
            continue
        key, value = line.split('=', 1)
        attrs[key.strip()] = value.strip()
    return attrs


def read_config(path_file_config: str) -> dict[str, str]:
    try:
        with open(path_file_config, 'r', encoding='utf-8') as f:
            attrs = parse_config_lines(f)
    except OSError as e:
        raise ConfigError(
            f"configuration file '{path_file_config}' could not be opened for reading"
        ) from e
    except UnicodeDecodeError as e:
        raise ConfigError(
            f"configuration file '{path_file_config}' is not valid utf-8 text"
        ) from e
    logger.debug(f'read {len(attrs)} entries from {path_file_config}')
    return attrs


def write_config(path_file_config: str, attrs: dict) -> None:
    try:
        with open(path_file_config, 'w', encoding='utf-8') as f:
            f.write('# written by hsicube\n')
            for key, value in attrs.items():
                f.write(f'{key} = {value}\n')
    except OSError as e:
        raise CubeIOError(
            f"configuration file '{path_file_config}' could not be opened for writing"
        ) from e
