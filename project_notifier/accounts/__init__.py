"""Privileged-account capability (admin role grants)."""

from .service import (
    ADMIN_CLAIMS,
    AccountRoleService,
    AccountServiceError,
    AuthenticationRequiredError,
    ClaimsStore,
    InvalidArgumentError,
    RoleGrantRequest,
    RoleGrantResult,
)

__all__ = [
    "AccountRoleService",
    "ClaimsStore",
    "RoleGrantRequest",
    "RoleGrantResult",
    "ADMIN_CLAIMS",
    "AccountServiceError",
    "AuthenticationRequiredError",
    "InvalidArgumentError",
]
