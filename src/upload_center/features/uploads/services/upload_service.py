"""Upload workflow controller.

Drives one upload at a time through
``IDLE -> VALIDATING -> FILE_SELECTED | READY_TO_SUBMIT -> SUBMITTING ->
COMPLETED | FAILED``. Files are validated locally against the
server-declared constraints before anything is sent. Progress is
synthesized while the single multipart request is in flight and only
reaches 100 once the server has confirmed the upload.
"""

import asyncio
import logging
from contextlib import suppress
from typing import Any, Callable, List, Optional

from ....config.constants import GENERIC_UPLOAD_FAILURE, RefreshReason
from ....config.settings import ClientSettings, get_settings
from ....core.exceptions import (
    UploadCenterError,
    ValidationError,
    ServerError,
    SessionClosedError,
    InvalidStateError,
)
from ....utils.error_handling import operation_error_handler, log_operation
from ...session.services import Session
from ...refresh.services import RefreshCoordinator
from ...hierarchy.entities import Application, Location
from ...hierarchy.services import HierarchyController
from ..entities.candidate import UploadCandidate
from ..entities.constraints import UploadConstraints
from ..entities.receipt import UploadReceipt
from ..entities.upload_state import UploadState
from ..entities.protocols import UploadApi
from ..utils.validation import validate_candidate

logger = logging.getLogger(__name__)

StateListener = Callable[[UploadState], Any]
ProgressListener = Callable[[int], Any]


class UploadController:
    """Selection, validation and submission of a single file."""

    def __init__(
        self,
        api: UploadApi,
        hierarchy: HierarchyController,
        session: Session,
        coordinator: RefreshCoordinator,
        settings: Optional[ClientSettings] = None,
    ):
        settings = settings or get_settings()
        self._api = api
        self._hierarchy = hierarchy
        self._session = session
        self._coordinator = coordinator

        self._max_file_size = settings.max_file_size
        self._progress_interval = settings.progress_interval
        self._progress_step = settings.progress_step
        self._progress_ceiling = settings.progress_ceiling

        self._state = UploadState.IDLE
        self._candidate: Optional[UploadCandidate] = None
        self._application_id: Optional[int] = None
        self._location_id: Optional[int] = None
        self._additional_path = ""
        self._progress = 0
        self._last_error: Optional[str] = None
        self._last_receipt: Optional[UploadReceipt] = None

        self._constraints: Optional[UploadConstraints] = None
        self._constraints_lock = asyncio.Lock()
        self._ticker: Optional[asyncio.Task] = None

        self._state_listeners: List[StateListener] = []
        self._progress_listeners: List[ProgressListener] = []

    # Read-only view

    @property
    def state(self) -> UploadState:
        return self._state

    @property
    def candidate(self) -> Optional[UploadCandidate]:
        return self._candidate

    @property
    def application_id(self) -> Optional[int]:
        return self._application_id

    @property
    def location_id(self) -> Optional[int]:
        return self._location_id

    @property
    def additional_path(self) -> str:
        return self._additional_path

    @property
    def progress(self) -> int:
        return self._progress

    @property
    def last_error(self) -> Optional[str]:
        """User-visible reason of the last rejection or failed submission."""
        return self._last_error

    @property
    def last_receipt(self) -> Optional[UploadReceipt]:
        return self._last_receipt

    @property
    def applications(self) -> List[Application]:
        return self._hierarchy.applications

    @property
    def locations(self) -> List[Location]:
        """Selectable locations for the selected application."""
        if self._application_id is None:
            return []
        return self._hierarchy.cached_locations(self._application_id) or []

    @property
    def can_submit(self) -> bool:
        return (
            self._state != UploadState.SUBMITTING
            and self._candidate is not None
            and self._application_id is not None
            and self._location_id is not None
        )

    # Listeners

    def add_state_listener(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    def _notify(self, listeners: List[Callable[[Any], Any]], value: Any) -> None:
        for listener in list(listeners):
            try:
                listener(value)
            except Exception as e:
                logger.error(f"Upload listener failed: {e}")

    def _set_state(self, state: UploadState) -> None:
        if state == self._state:
            return
        logger.debug(f"Upload state {self._state.value} -> {state.value}")
        self._state = state
        self._notify(self._state_listeners, state)

    def _set_progress(self, value: int) -> None:
        # Progress never moves backwards within one attempt
        if value <= self._progress:
            return
        self._progress = min(value, 100)
        self._notify(self._progress_listeners, self._progress)

    def _reset_progress(self) -> None:
        if self._progress:
            self._progress = 0
            self._notify(self._progress_listeners, 0)

    def _sync_selection_state(self) -> None:
        if self._state in (UploadState.SUBMITTING, UploadState.VALIDATING):
            return
        if self._candidate is None:
            return
        self._set_state(UploadState.READY_TO_SUBMIT if self.can_submit else UploadState.FILE_SELECTED)

    def _ensure_not_submitting(self) -> None:
        if self._state == UploadState.SUBMITTING:
            raise InvalidStateError("An upload is already in progress")

    # Constraints

    async def get_constraints(self) -> UploadConstraints:
        """Fetch the allowed extensions once per session.

        When the fetch fails every extension is allowed for the rest of the
        session; the size limit still applies.
        """
        if self._constraints is not None:
            return self._constraints

        async with self._constraints_lock:
            if self._constraints is not None:
                return self._constraints

            token = self._session.require_active()
            try:
                extensions = await self._api.get_allowed_extensions()
                constraints = UploadConstraints.from_extensions(extensions, self._max_file_size)
            except SessionClosedError:
                raise
            except UploadCenterError as e:
                logger.warning(f"Could not load upload configuration, allowing all file types: {e}")
                constraints = UploadConstraints.allow_all(self._max_file_size)

            self._session.ensure_current(token)
            self._constraints = constraints
            return constraints

    # Selection

    async def select_file(self, candidate: UploadCandidate) -> UploadState:
        """Validate and hold ``candidate``; a rejected file leaves no file selected."""
        if not self._state.accepts_file_selection:
            raise InvalidStateError(f"Cannot select a file while {self._state.value}")

        self._set_state(UploadState.VALIDATING)
        self._reset_progress()
        try:
            constraints = await self.get_constraints()
            validate_candidate(candidate, constraints)
        except ValidationError as e:
            logger.info(f"Rejected {candidate.filename}: {e}")
            self._candidate = None
            self._last_error = e.message
            self._set_state(UploadState.REJECTED)
            self._set_state(UploadState.IDLE)
            raise
        except UploadCenterError:
            self._candidate = None
            self._set_state(UploadState.IDLE)
            raise

        self._candidate = candidate
        self._last_error = None
        self._set_state(UploadState.READY_TO_SUBMIT if self.can_submit else UploadState.FILE_SELECTED)
        return self._state

    def clear_file(self) -> None:
        self._ensure_not_submitting()
        self._candidate = None
        self._reset_progress()
        self._set_state(UploadState.IDLE)

    async def select_application(self, application_id: Optional[int]) -> List[Location]:
        """Select an application and load its locations.

        Any selected location is cleared first, since it belongs to the
        previous application.
        """
        self._ensure_not_submitting()
        if (
            application_id is not None
            and self._hierarchy.applications_loaded
            and self._hierarchy.get_application(application_id) is None
        ):
            raise ValidationError(f"Unknown application: {application_id}", field="application_id")

        self._application_id = application_id
        self._location_id = None
        self._sync_selection_state()

        if application_id is None:
            return []
        return await self._hierarchy.list_locations(application_id)

    async def select_location(self, location_id: Optional[int]) -> None:
        self._ensure_not_submitting()
        if location_id is None:
            self._location_id = None
            self._sync_selection_state()
            return

        if self._application_id is None:
            raise ValidationError("Select an application first", field="application_id")

        application_id = self._application_id
        locations = self._hierarchy.cached_locations(application_id)
        if locations is None:
            locations = await self._hierarchy.list_locations(application_id)

        if self._application_id != application_id:
            raise InvalidStateError("Application selection changed while loading locations")
        if not any(location.id == location_id for location in locations):
            raise ValidationError(
                f"Location {location_id} does not belong to the selected application",
                field="location_id",
            )

        self._location_id = location_id
        self._sync_selection_state()

    def set_additional_path(self, text: Optional[str]) -> None:
        self._additional_path = text or ""

    # Submission

    async def _tick_progress(self, token: int) -> None:
        while self._session.is_current(token) and self._progress < self._progress_ceiling:
            await asyncio.sleep(self._progress_interval)
            if not self._session.is_current(token):
                return
            self._set_progress(min(self._progress + self._progress_step, self._progress_ceiling))

    @staticmethod
    def _failure_message(error: Exception) -> str:
        if isinstance(error, ServerError):
            message = error.payload.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return GENERIC_UPLOAD_FAILURE

    @operation_error_handler("upload file")
    @log_operation("upload file", include_timing=True)
    async def submit(self) -> UploadReceipt:
        """Send the selected file; not cancellable once started."""
        self._ensure_not_submitting()
        if not self.can_submit:
            raise ValidationError("Select a file, an application and a location before uploading")

        token = self._session.require_active()
        candidate = self._candidate
        additional_path = self._additional_path.strip() or None

        self._last_error = None
        self._progress = 0
        self._set_state(UploadState.SUBMITTING)
        self._notify(self._progress_listeners, 0)

        ticker = self._ticker = asyncio.create_task(self._tick_progress(token))
        try:
            receipt = await self._api.upload_file(
                candidate,
                self._application_id,
                self._location_id,
                additional_path,
            )
        except Exception as e:
            if not self._session.is_current(token):
                raise SessionClosedError("Session was cleared during the upload") from e
            self._last_error = self._failure_message(e)
            logger.warning(f"Upload of {candidate.filename} failed: {self._last_error}")
            self._set_state(UploadState.FAILED)
            self._set_state(UploadState.READY_TO_SUBMIT)
            raise
        finally:
            ticker.cancel()
            with suppress(asyncio.CancelledError):
                await ticker
            if self._ticker is ticker:
                self._ticker = None

        self._session.ensure_current(token)

        self._set_progress(100)
        self._last_receipt = receipt
        self._candidate = None
        self._additional_path = ""
        self._set_state(UploadState.COMPLETED)
        logger.info(f"Uploaded {receipt.filename} as upload {receipt.upload_id} to {receipt.file_location}")

        await self._coordinator.bump(RefreshReason.UPLOAD_COMPLETED)
        return receipt

    # Refresh and session lifecycle

    async def refresh_applications(self) -> List[Application]:
        return await self._hierarchy.list_applications()

    def reset(self, reason: str = "") -> None:
        """Forget the selection, the cached constraints and any attempt in progress."""
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        self._constraints = None
        self._candidate = None
        self._application_id = None
        self._location_id = None
        self._additional_path = ""
        self._last_error = None
        self._last_receipt = None
        self._progress = 0
        self._set_state(UploadState.IDLE)
