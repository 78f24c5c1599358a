"""Registry utilities."""

from .file_saver import DirectorySaver, save_download

__all__ = [
    "DirectorySaver",
    "save_download",
]
