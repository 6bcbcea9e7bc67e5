"""Report missing, malformed or whitespace-padded deployment variables."""
from __future__ import annotations

import argparse
import os

from application.use_cases.check_environment import REQUIRED_VARIABLES, check_environment


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--name",
        action="append",
        dest="names",
        help="Variable to check. Can be passed several times (default: the Supabase and JWT settings).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    report = check_environment(os.environ, tuple(args.names or REQUIRED_VARIABLES))

    for status in report.variables:
        flag = "ok " if status.defined and not status.padded else "!! "
        print(f"{flag}{status.name}: {status.preview} (length {status.length})")
    print(f"\n{report.defined}/{len(report.variables)} defined")

    if report.ok:
        print("No issues found.")
        return 0
    print("Issues:")
    for issue in report.issues:
        print(f"  - {issue}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
