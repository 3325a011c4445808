from dataclasses import dataclass


@dataclass(frozen=True)
class UserIdentity:
    """Authenticated caller, built from verified token claims for one request."""
    user_id: str
    email: str
    role: str = "COMMON"
