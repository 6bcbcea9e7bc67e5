"""Log in against the REST API and verify the issued token."""
from __future__ import annotations

import argparse
import getpass

from infrastructure.config import ContainerConfig
from infrastructure.http.auth_probe import AuthProbe, ProbeResult
from ui.logging_utils import setup_logging


def parse_args(default_api_url: str) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email", required=True, help="Account email")
    parser.add_argument("--password", help="Account password (prompted when omitted)")
    parser.add_argument(
        "--api-url",
        default=default_api_url,
        help=f"API base URL (default: {default_api_url})",
    )
    parser.add_argument("--timeout", type=float, default=30, help="Request timeout in seconds")
    return parser.parse_args()


def _print_result(label: str, result: ProbeResult) -> None:
    status = "PASS" if result.ok else "FAIL"
    print(f"{status} {label}: {result.endpoint} -> {result.status_code or 'no response'}")
    if result.role:
        print(f"     role: {result.role}, permissions: {len(result.permissions)}")
    if result.error:
        print(f"     error: {result.error}")


def main() -> int:
    config = ContainerConfig.from_env()
    args = parse_args(config.api_base_url)
    setup_logging(config.log_level, config.log_file)
    password = args.password or getpass.getpass("Password: ")

    probe = AuthProbe(args.api_url, timeout=args.timeout)
    login = probe.login(args.email, password)
    _print_result("login", login)
    if not login.ok or not login.token:
        return 1

    verified = probe.verify(login.token)
    _print_result("verify", verified)
    return 0 if verified.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
