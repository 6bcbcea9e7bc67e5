"""Check that an account exists and holds the expected role."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from domain.entities import Role, UserAccount
from domain.interfaces import AccountDirectory

logger = logging.getLogger(__name__)


class AccountNotFoundError(LookupError):
    def __init__(self, email: str) -> None:
        super().__init__(f"No account registered for {email}")
        self.email = email


@dataclass(slots=True)
class AccountReport:
    account: UserAccount
    roles: list[Role]
    required_role: str
    permissions: list[str] = field(default_factory=list)

    @property
    def role_names(self) -> list[str]:
        return [role.name for role in self.roles]

    @property
    def has_required_role(self) -> bool:
        return self.required_role in self.role_names


def verify_account(
    email: str,
    *,
    directory: AccountDirectory,
    required_role: str = "admin",
) -> AccountReport:
    normalized = email.strip().lower()
    account = directory.find_by_email(normalized)
    if account is None:
        raise AccountNotFoundError(normalized)

    roles = directory.roles_for(account.id)
    report = AccountReport(account=account, roles=roles, required_role=required_role)
    if report.has_required_role:
        report.permissions = sorted(set(directory.permissions_for(account.id)))
    logger.info(
        "Account %s has roles %s (%s required)",
        normalized,
        ", ".join(report.role_names) or "none",
        required_role,
    )
    return report


__all__ = ["AccountNotFoundError", "AccountReport", "verify_account"]
