"""
Startup configuration checks.

Run before the first store is built so a bad .env stops the process with
one readable report instead of failing halfway through a session.
"""

import os
import sys

from enums.storage_backend import StorageBackend


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, problems: list[str]):
        super().__init__("\n".join(problems))
        self.problems = problems


def check_required(value: str | None, name: str, example: str = "") -> str | None:
    if value:
        return None
    problem = f"{name} is required but not set"
    if example:
        problem += f" (add to .env: {name}={example})"
    return problem


def check_non_negative(value: float, name: str) -> str | None:
    if value < 0:
        return f"{name} must not be negative (got: {value})"
    return None


def check_catalog_path(path: str) -> str | None:
    if not os.path.isfile(path):
        return f"CATALOG_DATA_PATH does not point to a file: {path}"
    return None


def validate_startup_config(config_module) -> None:
    """
    Check every setting the stores depend on.

    Raises:
        ConfigValidationError: listing all problems found, not just the first
    """
    checks = [
        check_non_negative(config_module.MOCK_API_LATENCY_FACTOR, 'MOCK_API_LATENCY_FACTOR'),
        check_non_negative(config_module.SHIPPING_FEE, 'SHIPPING_FEE'),
        check_non_negative(config_module.STORAGE_TTL_SECONDS, 'STORAGE_TTL_SECONDS'),
        check_catalog_path(config_module.CATALOG_DATA_PATH),
    ]
    if config_module.STORAGE_BACKEND == StorageBackend.REDIS:
        checks.append(check_required(config_module.REDIS_HOST, 'REDIS_HOST', 'localhost'))

    problems = [problem for problem in checks if problem]
    if problems:
        raise ConfigValidationError(problems)


def validate_or_exit(config_module) -> None:
    """Validate configuration; print the report and exit with code 1 on failure."""
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print("\n ERROR: Configuration Validation Failed\n", file=sys.stderr)
        for problem in e.problems:
            print(f"  - {problem}", file=sys.stderr)
        print("\nStartup aborted. Please fix configuration and try again.\n", file=sys.stderr)
        sys.exit(1)
