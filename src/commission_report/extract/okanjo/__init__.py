"""Okanjo extraction module."""

from .commission_report import okanjo_session, pull_commissions, report_window
from .okanjo_client import (
    OkanjoAPIError,
    OkanjoAuthenticationError,
    OkanjoClient,
    OkanjoSession,
)
from .okanjo_config import OkanjoConfig, OkanjoConfigError, load_okanjo_config

__all__ = [
    "OkanjoAPIError",
    "OkanjoAuthenticationError",
    "OkanjoClient",
    "OkanjoConfig",
    "OkanjoConfigError",
    "OkanjoSession",
    "load_okanjo_config",
    "okanjo_session",
    "pull_commissions",
    "report_window",
]
