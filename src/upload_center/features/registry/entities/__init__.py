"""Registry entities - upload records, filters and protocols."""

from .upload import Upload
from .filter_set import FilterSet, FILTER_FIELDS
from .protocols import RegistryApi, FileSaver

__all__ = [
    "Upload",
    "FilterSet",
    "FILTER_FIELDS",
    "RegistryApi",
    "FileSaver",
]
