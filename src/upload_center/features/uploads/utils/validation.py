"""Client-side checks run before a file is accepted for upload."""

from ....core.exceptions import ValidationError
from ....utils.formatting import format_size_limit
from ..entities.candidate import UploadCandidate
from ..entities.constraints import UploadConstraints


def validate_candidate(candidate: UploadCandidate, constraints: UploadConstraints) -> None:
    """Raise ValidationError for the first failed check.

    The extension is checked before the size. Matching is case-insensitive
    and an empty allowed set accepts every extension.
    """
    if not constraints.allows_all_extensions and candidate.extension not in constraints.allowed_extensions:
        raise ValidationError(
            f"Invalid file type. Allowed types: {constraints.describe_extensions()}",
            field="file",
        )

    if candidate.size > constraints.max_file_size:
        raise ValidationError(
            f"File size exceeds {format_size_limit(constraints.max_file_size)} limit",
            field="file",
        )
