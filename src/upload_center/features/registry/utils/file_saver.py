"""Client-side save-as for downloaded files."""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def save_download(destination: Union[str, Path], filename: str, content: bytes) -> Path:
    """Write ``content`` under ``destination``.

    An existing directory receives the file under its original name; any
    other path is used as the target file itself.
    """
    target = Path(destination).expanduser()
    if target.is_dir():
        target = target / Path(filename).name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
    logger.debug(f"Saved {len(content)} bytes to {target}")
    return target


class DirectorySaver:
    """FileSaver that drops every download into one directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def __call__(self, filename: str, content: bytes) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return save_download(self.directory, filename, content)
