"""Inspect deployment environment variables without leaking their values.

Values copied into a hosting dashboard with a trailing newline once broke
every Supabase call in production, so padded values are reported explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

REQUIRED_VARIABLES = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    "JWT_SECRET",
)

MIN_JWT_SECRET_LENGTH = 32


@dataclass(slots=True)
class VariableStatus:
    name: str
    defined: bool
    length: int
    preview: str
    padded: bool = False


@dataclass(slots=True)
class EnvironmentReport:
    variables: list[VariableStatus] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def defined(self) -> int:
        return sum(1 for status in self.variables if status.defined)


def mask_value(value: str | None, show_length: int = 10) -> str:
    """Show enough of a secret to recognise it, never the whole thing."""
    if not value:
        return "undefined"
    if len(value) <= show_length:
        return value[:3] + "*" * max(0, len(value) - 3)
    return f"{value[:show_length]}...{value[-3:]}"


def check_environment(
    environ: Mapping[str, str],
    names: Iterable[str] = REQUIRED_VARIABLES,
) -> EnvironmentReport:
    report = EnvironmentReport()
    for name in names:
        raw = environ.get(name)
        value = raw.strip() if raw is not None else ""
        status = VariableStatus(
            name=name,
            defined=bool(value),
            length=len(raw) if raw is not None else 0,
            preview=mask_value(value),
            padded=raw is not None and raw != value,
        )
        report.variables.append(status)

        if not status.defined:
            report.issues.append(f"{name} is undefined or empty")
            continue
        if status.padded:
            if raw.rstrip(" \t") != raw.rstrip():
                report.issues.append(f"{name} ends with a newline character")
            else:
                report.issues.append(f"{name} has leading or trailing whitespace")
        if name == "SUPABASE_URL" and not value.startswith("https://"):
            report.issues.append(f"{name} should start with https://")
        if name == "JWT_SECRET" and len(value) < MIN_JWT_SECRET_LENGTH:
            report.issues.append(f"{name} should be at least {MIN_JWT_SECRET_LENGTH} characters long")
    return report


__all__ = [
    "REQUIRED_VARIABLES",
    "EnvironmentReport",
    "VariableStatus",
    "check_environment",
    "mask_value",
]
