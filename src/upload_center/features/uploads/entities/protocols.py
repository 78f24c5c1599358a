"""Protocol interfaces for upload operations."""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from .candidate import UploadCandidate
from .receipt import UploadReceipt


@runtime_checkable
class UploadApi(Protocol):
    """Backend operations used by the upload workflow."""

    @abstractmethod
    async def get_allowed_extensions(self) -> List[str]:
        ...

    @abstractmethod
    async def upload_file(
        self,
        candidate: UploadCandidate,
        application_id: int,
        location_id: int,
        additional_path: Optional[str] = None,
    ) -> UploadReceipt:
        ...
