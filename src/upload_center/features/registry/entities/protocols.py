"""Protocol interfaces for the upload listing."""

from abc import abstractmethod
from pathlib import Path
from typing import Dict, List, Protocol, runtime_checkable

from .upload import Upload


@runtime_checkable
class RegistryApi(Protocol):
    """Backend operations behind the file registry."""

    @abstractmethod
    async def list_uploads(self, params: Dict[str, str]) -> List[Upload]:
        ...

    @abstractmethod
    async def download_file(self, filename: str) -> bytes:
        ...

    @abstractmethod
    async def share_file(self, upload_id: int, shared_with: str) -> str:
        ...


@runtime_checkable
class FileSaver(Protocol):
    """Client-side save-as for downloaded blobs."""

    def __call__(self, filename: str, content: bytes) -> Path:
        ...
