"""Configuration for a sync run, read once from the environment."""

import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from leetcode_sync.errors import ConfigError


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class SyncConfig:
    """Credentials, target repository and tuning knobs for one run."""

    github_token: str = ""
    repository: str = ""
    branch: Optional[str] = None
    leetcode_csrf_token: str = ""
    leetcode_session: str = ""
    filter_duplicate_secs: int = 86400
    request_delay: float = 1.0
    max_retries: int = 5
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "SyncConfig":
        """
        Load configuration from environment variables.

        Args:
            env_path: Optional path to a .env file (defaults to .env in the current directory)

        Returns:
            SyncConfig populated from the environment
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        return cls(
            github_token=os.getenv("GITHUB_TOKEN", ""),
            repository=os.getenv("GITHUB_REPO") or os.getenv("GITHUB_REPOSITORY", ""),
            branch=os.getenv("GITHUB_BRANCH") or None,
            leetcode_csrf_token=os.getenv("LEETCODE_CSRF_TOKEN", ""),
            leetcode_session=os.getenv("LEETCODE_SESSION", ""),
            filter_duplicate_secs=_int_env("FILTER_DUPLICATE_SECS", 86400),
            request_delay=_float_env("LEETCODE_REQUEST_DELAY", 1.0),
            max_retries=_int_env("LEETCODE_MAX_RETRIES", 5),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> List[str]:
        """
        Validate configuration and return a list of validation errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.github_token:
            errors.append("Missing GITHUB_TOKEN in environment")
        if not self.repository:
            errors.append("Missing GITHUB_REPO (or GITHUB_REPOSITORY) in environment")
        elif self.repository.count("/") != 1 or not all(self.repository.split("/")):
            errors.append(f"Repository must be in owner/name form, got {self.repository!r}")
        if not self.leetcode_csrf_token:
            errors.append("Missing LEETCODE_CSRF_TOKEN in environment")
        if not self.leetcode_session:
            errors.append("Missing LEETCODE_SESSION in environment")

        if self.filter_duplicate_secs < 0:
            errors.append("FILTER_DUPLICATE_SECS must not be negative")
        if self.request_delay < 0:
            errors.append("LEETCODE_REQUEST_DELAY must not be negative")
        if self.max_retries < 0:
            errors.append("LEETCODE_MAX_RETRIES must not be negative")

        return errors
