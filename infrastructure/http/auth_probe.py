"""Smoke-test client for the REST API's authentication endpoints."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProbeResult:
    endpoint: str
    ok: bool
    status_code: int | None = None
    token: str | None = None
    role: str | None = None
    permissions: list[str] = field(default_factory=list)
    error: str | None = None


class AuthProbe:
    """Logs in against ``{base_url}/auth/login`` and verifies the token."""

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def login(self, email: str, password: str) -> ProbeResult:
        endpoint = f"{self._base_url}/auth/login"
        try:
            response = self._session.post(
                endpoint,
                json={"email": email, "password": password},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Login request to %s failed: %s", endpoint, exc)
            return ProbeResult(endpoint=endpoint, ok=False, error=str(exc))

        payload = _json_or_empty(response)
        token = payload.get("token")
        result = ProbeResult(
            endpoint=endpoint,
            ok=response.ok and bool(token),
            status_code=response.status_code,
            token=token,
            error=None if response.ok else payload.get("error") or response.reason,
        )
        _fill_user(result, payload)
        if response.ok and not token:
            result.error = "response carried no token"
        return result

    def verify(self, token: str) -> ProbeResult:
        endpoint = f"{self._base_url}/auth/verify"
        try:
            response = self._session.get(
                endpoint,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Verify request to %s failed: %s", endpoint, exc)
            return ProbeResult(endpoint=endpoint, ok=False, error=str(exc))

        payload = _json_or_empty(response)
        result = ProbeResult(
            endpoint=endpoint,
            ok=response.ok,
            status_code=response.status_code,
            token=token,
            error=None if response.ok else payload.get("error") or response.reason,
        )
        _fill_user(result, payload)
        return result


def _json_or_empty(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _fill_user(result: ProbeResult, payload: dict[str, Any]) -> None:
    user = payload.get("user")
    if not isinstance(user, dict):
        user = {}
    result.role = user.get("role")
    result.permissions = list(user.get("permissions") or [])


__all__ = ["AuthProbe", "ProbeResult"]
