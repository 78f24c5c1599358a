"""File registry view.

Filterable listing of stored uploads with download and share actions.
Only the most recent query may update the displayed list; responses to
superseded queries are dropped.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from ....config.settings import ClientSettings, get_settings
from ....core.exceptions import UploadCenterError, ValidationError, AuthError, SessionClosedError
from ....utils.error_handling import operation_error_handler, log_operation
from ...session.services import Session
from ..entities.upload import Upload
from ..entities.filter_set import FilterSet
from ..entities.protocols import RegistryApi, FileSaver
from ..utils.file_saver import DirectorySaver, save_download

logger = logging.getLogger(__name__)

SEARCH_FIELD = "search"


class FileRegistryView:
    """Displayed upload list and the filters that produced it."""

    def __init__(
        self,
        api: RegistryApi,
        session: Session,
        saver: Optional[FileSaver] = None,
        settings: Optional[ClientSettings] = None,
    ):
        self._api = api
        self._session = session
        self._saver = saver or DirectorySaver((settings or get_settings()).download_dir)

        self._uploads: List[Upload] = []
        self._filters = FilterSet()
        self._sequence = 0
        self._loading = False
        self._last_error: Optional[str] = None

    @property
    def uploads(self) -> List[Upload]:
        return list(self._uploads)

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def has_active_filters(self) -> bool:
        return not self._filters.is_empty

    def get_upload(self, upload_id: int) -> Optional[Upload]:
        for upload in self._uploads:
            if upload.id == upload_id:
                return upload
        return None

    @operation_error_handler("query uploads")
    @log_operation("query uploads", include_result_summary=True)
    async def query(self, filters: Optional[FilterSet] = None) -> Optional[List[Upload]]:
        """Fetch the listing for the current filters.

        Returns None when a newer query was issued before this one
        finished; the displayed list is then left to the newer query. On
        failure the previous list stays displayed. Failures that ended the
        session are always raised.
        """
        if filters is not None:
            self._filters = filters

        self._sequence += 1
        sequence = self._sequence

        if not self._session.is_authenticated:
            self._uploads = []
            self._loading = False
            return []

        token = self._session.require_active()
        self._loading = True
        try:
            uploads = await self._api.list_uploads(self._filters.to_params())
        except UploadCenterError as e:
            if not self._session.is_current(token):
                if isinstance(e, AuthError):
                    raise
                raise SessionClosedError("Session was cleared while the upload query was in flight") from e
            if sequence != self._sequence:
                logger.info(f"Ignoring failure of superseded upload query {sequence}: {e}")
                return None
            self._loading = False
            self._last_error = e.message
            raise

        if sequence != self._sequence:
            logger.debug(f"Discarding superseded upload query {sequence} (latest {self._sequence})")
            return None

        self._loading = False
        self._session.ensure_current(token)
        self._uploads = list(uploads)
        self._last_error = None
        return list(uploads)

    async def set_filter(self, name: str, value: Any) -> Optional[List[Upload]]:
        """Change one filter; every field except search re-queries immediately."""
        self._filters = self._filters.with_value(name, value)
        if name == SEARCH_FIELD:
            return None
        return await self.query()

    async def search(self, text: Optional[str] = None) -> Optional[List[Upload]]:
        """Apply the search text (the stored one when ``text`` is None)."""
        if text is not None:
            self._filters = self._filters.with_value(SEARCH_FIELD, text)
        return await self.query()

    async def clear_filter(self, name: str) -> Optional[List[Upload]]:
        self._filters = self._filters.without(name)
        return await self.query()

    async def clear_filters(self) -> Optional[List[Upload]]:
        self._filters = FilterSet()
        return await self.query()

    @operation_error_handler("download file")
    @log_operation("download file", include_timing=True)
    async def download(self, upload_id: int, destination: Union[str, Path, None] = None) -> Path:
        """Fetch a stored file, save it locally and re-query for the new count.

        A failed download leaves the listing untouched.
        """
        upload = self.get_upload(upload_id)
        if upload is None:
            raise ValidationError(f"Unknown upload: {upload_id}", field="upload_id")

        token = self._session.require_active()
        content = await self._api.download_file(upload.filename)
        self._session.ensure_current(token)

        if destination is not None:
            path = save_download(destination, upload.filename, content)
        else:
            path = self._saver(upload.filename, content)
        logger.info(f"Downloaded {upload.filename} to {path}")

        try:
            await self.query()
        except UploadCenterError as e:
            logger.warning(f"Could not refresh uploads after downloading {upload.filename}: {e}")

        return path

    @operation_error_handler("share file")
    @log_operation("share file")
    async def share(self, upload_id: int, recipient: str) -> str:
        """Share an upload with another user id; returns the server's confirmation."""
        shared_with = (recipient or "").strip()
        if not shared_with:
            raise ValidationError("Please enter a user ID to share with", field="shared_with")

        token = self._session.require_active()
        message = await self._api.share_file(upload_id, shared_with)
        self._session.ensure_current(token)

        logger.info(f"Shared upload {upload_id} with {shared_with}")
        return message

    def reset(self, reason: str = "") -> None:
        """Empty the listing and supersede any query still in flight."""
        self._sequence += 1
        self._uploads = []
        self._filters = FilterSet()
        self._loading = False
        self._last_error = None
