from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_BASE_URL = "https://api2.okanjo.com"


class OkanjoConfigError(ValueError):
    """Raised when required Okanjo configuration is missing or invalid."""


@dataclass(frozen=True)
class OkanjoConfig:
    email: str
    password: str = field(repr=False)
    api_key: str = field(repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout_s: int = 60
    instance_ids: Tuple[str, ...] = ()
    window_days: int = 30
    output_json_path: str = "output.json"
    output_csv_path: str = "output.csv"


def _require_env(key: str) -> str:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        raise OkanjoConfigError(f"Missing required environment variable: {key}")
    return value.strip()


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key, "").strip()
    if raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise OkanjoConfigError(f"{key} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise OkanjoConfigError(f"{key} must be positive, got {value}")
    return value


def _env_list(key: str) -> Tuple[str, ...]:
    raw = os.getenv(key, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def load_okanjo_config() -> OkanjoConfig:
    """
    Load Okanjo configuration from environment variables.

    EMAIL, PASSWORD and API_KEY are required; everything else has a default.
    This function performs only validation + object construction.
    It does NOT make any network calls.
    """
    return OkanjoConfig(
        email=_require_env("EMAIL"),
        password=_require_env("PASSWORD"),
        api_key=_require_env("API_KEY"),
        base_url=os.getenv("OKANJO_API_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL,
        timeout_s=_env_int("OKANJO_TIMEOUT_S", 60),
        instance_ids=_env_list("OKANJO_INSTANCE_IDS"),
        window_days=_env_int("REPORT_WINDOW_DAYS", 30),
        output_json_path=os.getenv("OUTPUT_JSON_PATH", "").strip() or "output.json",
        output_csv_path=os.getenv("OUTPUT_CSV_PATH", "").strip() or "output.csv",
    )
