from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .okanjo_client import OkanjoAPIError, OkanjoClient, OkanjoSession

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30


def _iso_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def report_window(now: Optional[datetime] = None, *, days: int = DEFAULT_WINDOW_DAYS) -> Tuple[str, str]:
    """
    Return (start, end) ISO strings for the rolling report window.

    end is today at 00:00 UTC (today itself is not reported),
    start is `days` days before that.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    end_dt = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    start_dt = end_dt - timedelta(days=days)
    return _iso_utc(start_dt), _iso_utc(end_dt)


@contextmanager
def okanjo_session(client: OkanjoClient, email: str, password: str) -> Iterator[OkanjoSession]:
    """
    Log in, yield the session, and always log out afterwards.

    If the body raised, a failed logout is only logged so the original
    error is the one that surfaces.
    """
    session = client.create_session(email, password)
    try:
        yield session
    except BaseException:
        try:
            client.delete_session(session.account_id, session.session_id, session.token)
        except OkanjoAPIError as e:
            logger.warning(f"Could not delete Okanjo session {session.session_id}: {e}")
        raise
    client.delete_session(session.account_id, session.session_id, session.token)


def pull_commissions(
    client: OkanjoClient,
    session: OkanjoSession,
    *,
    start: Optional[str] = None,
    end: Optional[str] = None,
    filters: Optional[Dict[str, Any]] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    if start is None or end is None:
        default_start, default_end = report_window(now, days=window_days)
        start = start or default_start
        end = end or default_end

    logger.info(f"Fetching commission report {start} -> {end}")
    commissions = client.commission_report(session.token, start=start, end=end, **(filters or {}))
    logger.info(f"Commission records fetched: {len(commissions)}")
    return commissions
