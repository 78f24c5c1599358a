"""User domain entity.

The active user's directory profile as returned by the identity endpoint.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class User:
    """Authenticated user record.

    ``user_name`` is the opaque identifier sent to the backend with every
    request; the remaining fields are informational.
    """

    user_name: str
    display_name: str
    employee_id: str
    sam_account_name: str = ""
    email_address: str = ""
    name: str = ""
    given_name: str = ""
    middle_name: Optional[str] = None
    surname: str = ""
    description: str = ""
    distinguished_name: str = ""
    domain: Optional[str] = None

    def __post_init__(self):
        if not self.user_name or not self.user_name.strip():
            raise ValueError("User identifier must not be empty")

    @property
    def initials(self) -> str:
        """Initials derived from given name and surname, falling back to the display name."""
        parts = [p for p in (self.given_name, self.surname) if p]
        if not parts:
            parts = self.display_name.split()[:2]
        return "".join(p[0].upper() for p in parts)

    @classmethod
    def from_profile(cls, profile: Dict[str, Any]) -> "User":
        """Build a user from the identity endpoint's camelCase profile."""
        return cls(
            user_name=str(profile.get("userName") or ""),
            display_name=str(profile.get("displayName") or profile.get("name") or ""),
            employee_id=str(profile.get("employeeId") or ""),
            sam_account_name=str(profile.get("samAccountName") or ""),
            email_address=str(profile.get("emailAddress") or ""),
            name=str(profile.get("name") or ""),
            given_name=str(profile.get("givenName") or ""),
            middle_name=profile.get("middleName"),
            surname=str(profile.get("surname") or ""),
            description=str(profile.get("description") or ""),
            distinguished_name=str(profile.get("distinguishedName") or ""),
            domain=profile.get("domain"),
        )
