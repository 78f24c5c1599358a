"""Registry feature for upload-center.

- entities/: upload records, filters and the backend protocol
- utils/: saving downloaded files
- services/: the filterable listing with download and share
"""

from .entities import Upload, FilterSet, FILTER_FIELDS, RegistryApi, FileSaver
from .utils import DirectorySaver, save_download
from .services import FileRegistryView

__all__ = [
    "Upload",
    "FilterSet",
    "FILTER_FIELDS",
    "RegistryApi",
    "FileSaver",
    "DirectorySaver",
    "save_download",
    "FileRegistryView",
]
