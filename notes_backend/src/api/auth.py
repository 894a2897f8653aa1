import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, Request
from pydantic import ValidationError

from src.api.errors import StorageUnavailableError, UnauthenticatedError
from src.api.models import AdminList

logger = logging.getLogger(__name__)

# Identity settings
IDENTITY_HEADER = os.getenv("IDENTITY_HEADER", "Authorization")
AUTH_MODE = os.getenv("AUTH_MODE", "presence")
ADMINS_FILE = Path(os.getenv("ADMINS_FILE", "data/admin.json"))


def extract_identity(request: Request, header: str = IDENTITY_HEADER) -> Optional[str]:
    """Return the raw identity header value, or None when the header is missing."""
    return request.headers.get(header)


def load_admins(path: Path) -> List[str]:
    """Read the trusted admin names from disk."""
    try:
        return AdminList.model_validate_json(path.read_text(encoding="utf-8")).admins
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        logger.error("Cannot load admin list from %s: %s", path, exc)
        raise StorageUnavailableError(path, "admin list cannot be loaded") from exc


class IdentityCheck(ABC):
    """
    Decides whether a request's claimed identity may proceed.
    """

    def __init__(self, header: str = IDENTITY_HEADER):
        self.header = header

    @abstractmethod
    def accepts(self, identity: str) -> bool:
        """Check a non-empty identity."""

    def is_authenticated(self, request: Request) -> bool:
        identity = extract_identity(request, self.header)
        if not identity:
            return False
        return self.accepts(identity)


class PresenceCheck(IdentityCheck):
    """Any non-empty identity is accepted."""

    def accepts(self, identity: str) -> bool:
        return True


class AdminListCheck(IdentityCheck):
    """Only identities listed in the admin file are accepted."""

    def __init__(self, admins_file: Path, header: str = IDENTITY_HEADER):
        super().__init__(header)
        self.admins_file = Path(admins_file)

    def is_admin(self, identity: str) -> bool:
        # Read on every check, never cached.
        return identity in load_admins(self.admins_file)

    def accepts(self, identity: str) -> bool:
        return self.is_admin(identity)


def build_identity_check(mode: str, admins_file: Path = ADMINS_FILE, header: str = IDENTITY_HEADER) -> IdentityCheck:
    """
    Select the identity check for the configured mode.

    Raises:
        ValueError for an unknown mode.
    """
    if mode == "presence":
        return PresenceCheck(header)
    if mode == "admins":
        return AdminListCheck(admins_file, header)
    raise ValueError(f"Unknown AUTH_MODE: {mode!r}")


_identity_check = build_identity_check(AUTH_MODE)


def get_identity_check() -> IdentityCheck:
    """Dependency returning the configured identity check."""
    return _identity_check


# PUBLIC_INTERFACE
def get_current_identity(request: Request, check: IdentityCheck = Depends(get_identity_check)) -> str:
    """
    Dependency that returns the identity of the caller.

    Raises:
        UnauthenticatedError if the identity header is missing, empty or rejected.
    """
    if not check.is_authenticated(request):
        logger.warning("Rejected unauthenticated request to %s", request.url.path)
        raise UnauthenticatedError("Missing or rejected identity")
    return extract_identity(request, check.header)
