"""Filter set for the upload listing.

Every field is optional. An unset or blank field means "unconstrained" and
is left out of the request entirely; the backend would otherwise read an
empty string as "match empty".
"""

from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Any, Dict, Optional, Union

from ....core.exceptions import ValidationError

DateValue = Union[date, str, None]

FILTER_FIELDS = ("from_date", "to_date", "search", "application_id", "location_id")


def _is_unset(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


@dataclass(frozen=True)
class FilterSet:
    from_date: DateValue = None
    to_date: DateValue = None
    search: Optional[str] = None
    application_id: Optional[int] = None
    location_id: Optional[int] = None

    def to_params(self) -> Dict[str, str]:
        """Query parameters for ``GET /uploads`` with unset fields omitted."""
        params: Dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if _is_unset(value):
                continue
            if isinstance(value, date):
                value = value.isoformat()
            params[f.name] = str(value).strip()
        return params

    def with_value(self, name: str, value: Any) -> "FilterSet":
        """Copy with one field changed; blank values are stored as unset."""
        if name not in FILTER_FIELDS:
            raise ValidationError(f"Unknown filter: {name}", field=name)
        return replace(self, **{name: None if _is_unset(value) else value})

    def without(self, name: str) -> "FilterSet":
        return self.with_value(name, None)

    @property
    def is_empty(self) -> bool:
        return not self.to_params()
