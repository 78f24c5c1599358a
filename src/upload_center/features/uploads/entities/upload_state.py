"""Upload workflow states."""

from enum import Enum


class UploadState(str, Enum):
    """State of the current upload attempt.

    IDLE -> VALIDATING -> {REJECTED -> IDLE | FILE_SELECTED | READY_TO_SUBMIT}
    READY_TO_SUBMIT -> SUBMITTING -> {COMPLETED | FAILED -> READY_TO_SUBMIT}
    """

    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    FILE_SELECTED = "file_selected"
    READY_TO_SUBMIT = "ready_to_submit"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def accepts_file_selection(self) -> bool:
        return self in FILE_SELECTION_STATES


FILE_SELECTION_STATES = frozenset({
    UploadState.IDLE,
    UploadState.FILE_SELECTED,
    UploadState.READY_TO_SUBMIT,
    UploadState.COMPLETED,
    UploadState.FAILED,
})
