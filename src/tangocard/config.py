"""
Environment-driven settings for the RaaS client.

    RAAS_PLATFORM_NAME   - Basic auth user (required)
    RAAS_PLATFORM_KEY    - Basic auth password (required, never logged)
    RAAS_BASE_URL        - API root (default: sandbox v1.1)
    RAAS_TIMEOUT_SEC     - Request timeout (default: 15)
    RAAS_ERROR_DETAIL    - invalid_inputs | raw | none (default: invalid_inputs)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from .exceptions import RaasConfigError
from .response import ERROR_DETAIL_INVALID_INPUTS, ERROR_DETAIL_POLICIES


DEFAULT_BASE_URL = "https://sandbox.tangocard.com/raas/v1.1"
DEFAULT_TIMEOUT_SEC = 15.0


@dataclass(frozen=True)
class RaasConfig:
    platform_name: str
    platform_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SEC
    error_detail: str = ERROR_DETAIL_INVALID_INPUTS

    def __repr__(self) -> str:
        return (
            f"RaasConfig(platform_name={self.platform_name!r}, "
            f"base_url={self.base_url!r}, timeout={self.timeout}, "
            f"error_detail={self.error_detail!r})"
        )

    @classmethod
    def from_env(cls) -> "RaasConfig":
        platform_name = os.getenv("RAAS_PLATFORM_NAME", "").strip()
        platform_key = os.getenv("RAAS_PLATFORM_KEY", "").strip()
        if not platform_name or not platform_key:
            raise RaasConfigError(
                "RAAS_PLATFORM_NAME and RAAS_PLATFORM_KEY must both be set."
            )

        base_url = os.getenv("RAAS_BASE_URL", DEFAULT_BASE_URL).strip()
        parsed = urlparse(base_url)
        if not parsed.scheme or not parsed.netloc:
            raise RaasConfigError(
                f"RAAS_BASE_URL is not a valid URL: '{base_url}'"
            )

        timeout_raw = os.getenv("RAAS_TIMEOUT_SEC", str(DEFAULT_TIMEOUT_SEC)).strip()
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise RaasConfigError(
                f"RAAS_TIMEOUT_SEC must be a number, got '{timeout_raw}'."
            ) from e
        if timeout <= 0:
            raise RaasConfigError(
                f"RAAS_TIMEOUT_SEC must be positive, got '{timeout_raw}'."
            )

        error_detail = os.getenv("RAAS_ERROR_DETAIL", ERROR_DETAIL_INVALID_INPUTS).strip().lower()
        if error_detail not in ERROR_DETAIL_POLICIES:
            raise RaasConfigError(
                f"RAAS_ERROR_DETAIL must be one of {', '.join(ERROR_DETAIL_POLICIES)}, "
                f"got '{error_detail}'."
            )

        return cls(
            platform_name=platform_name,
            platform_key=platform_key,
            base_url=base_url,
            timeout=timeout,
            error_detail=error_detail,
        )
