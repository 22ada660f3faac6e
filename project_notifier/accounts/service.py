"""Admin role grants for staff accounts.

A direct request/response call, unlike the change triggers: failures are
raised to the caller as typed errors.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from project_notifier.logging import get_logger

logger = get_logger(__name__, component="accounts")

ADMIN_CLAIMS: Dict[str, Any] = {"admin": True}


class AccountServiceError(Exception):
    """Internal failure while changing an account's role."""

    code = "internal"


class AuthenticationRequiredError(AccountServiceError):
    """The caller is not authenticated."""

    code = "unauthenticated"


class InvalidArgumentError(AccountServiceError):
    """The request is missing the target account identifier."""

    code = "invalid-argument"


class ClaimsStore(Protocol):
    """Identity backend that stores custom claims per account."""

    def set_custom_claims(self, uid: str, claims: Dict[str, Any]) -> None: ...


@dataclass(frozen=True)
class RoleGrantRequest:
    """An authenticated call asking to elevate ``target_uid``.

    Attributes:
        caller_uid: Identity of the authenticated caller, None when anonymous
        target_uid: Account to elevate
    """

    caller_uid: Optional[str]
    target_uid: Optional[str]


@dataclass(frozen=True)
class RoleGrantResult:
    target_uid: str
    message: str


class AccountRoleService:
    """Grants the admin role through a ``ClaimsStore``."""

    def __init__(self, claims_store: ClaimsStore, logger_instance: Optional[logging.Logger] = None):
        self.claims_store = claims_store
        self.logger = logger_instance or logger

    def grant_admin(self, request: RoleGrantRequest) -> RoleGrantResult:
        """Set the admin claim on the target account.

        Raises:
            AuthenticationRequiredError: If the request carries no caller identity
            InvalidArgumentError: If no target account id is given
            AccountServiceError: If the claims store fails
        """
        if not (request.caller_uid or "").strip():
            raise AuthenticationRequiredError("Authentication is required to grant roles")

        target_uid = (request.target_uid or "").strip()
        if not target_uid:
            raise InvalidArgumentError("A target account id is required")

        try:
            self.claims_store.set_custom_claims(target_uid, dict(ADMIN_CLAIMS))
        except Exception as e:
            self.logger.error(
                f"Failed to grant admin role to {target_uid}: {e}",
                exc_info=True,
                extra={"event": "accounts.grant.failure", "target_uid": target_uid},
            )
            raise AccountServiceError(f"Could not grant admin role to {target_uid}") from e

        self.logger.info(
            f"Admin role granted to {target_uid}",
            extra={
                "event": "accounts.grant.success",
                "target_uid": target_uid,
                "caller_uid": request.caller_uid,
            },
        )
        return RoleGrantResult(target_uid=target_uid, message=f"Account {target_uid} is now an admin")
