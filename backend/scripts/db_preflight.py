"""Deployment preflight checks.

Usage:
    python scripts/db_preflight.py

Verifies the environment a production deployment will run with: database
backend, schema management and stock-alert policy values.
Exits non-zero when any required control fails.
"""

from __future__ import annotations

import os
import sys


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _int_env(name: str, default: int) -> int | None:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return None


def collect_checks() -> tuple[str, list[tuple[str, bool, str]]]:
    environment = os.getenv("ENVIRONMENT", "development").strip().lower()
    database_url = os.getenv("DATABASE_URL", "sqlite:///./tailorworks.db")
    auto_create_tables = _bool_env("AUTO_CREATE_TABLES", True)
    overdue_days = _int_env("ALERT_OVERDUE_DAYS", 7)
    cache_ttl = _int_env("TAILOR_CACHE_TTL_SECONDS", 3600)

    checks: list[tuple[str, bool, str]] = [
        (
            "ENVIRONMENT is explicitly set",
            bool(environment),
            f"ENVIRONMENT={environment or '<empty>'}",
        ),
        (
            "ALERT_OVERDUE_DAYS is a positive integer",
            overdue_days is not None and overdue_days > 0,
            f"ALERT_OVERDUE_DAYS={os.getenv('ALERT_OVERDUE_DAYS', overdue_days)}",
        ),
        (
            "TAILOR_CACHE_TTL_SECONDS is a positive integer",
            cache_ttl is not None and cache_ttl > 0,
            f"TAILOR_CACHE_TTL_SECONDS={os.getenv('TAILOR_CACHE_TTL_SECONDS', cache_ttl)}",
        ),
    ]

    if environment in {"production", "prod"}:
        checks.extend(
            [
                (
                    "DATABASE_URL is not SQLite",
                    "sqlite" not in database_url.lower(),
                    f"DATABASE_URL={database_url}",
                ),
                (
                    "AUTO_CREATE_TABLES is disabled",
                    not auto_create_tables,
                    f"AUTO_CREATE_TABLES={auto_create_tables}",
                ),
            ]
        )

    return environment, checks


def run() -> int:
    environment, checks = collect_checks()

    has_failures = False
    print("Tailorworks Preflight")
    print(f"- environment: {environment}")
    for title, ok, detail in checks:
        marker = "PASS" if ok else "FAIL"
        print(f"[{marker}] {title} ({detail})")
        if not ok:
            has_failures = True

    if has_failures:
        print("\nPreflight failed. Resolve failed checks before deployment.")
        return 1

    print("\nPreflight passed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
