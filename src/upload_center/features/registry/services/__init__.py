"""Registry services."""

from .registry_service import FileRegistryView

__all__ = ["FileRegistryView"]
