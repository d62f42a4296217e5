"""
Okanjo API client for sessions and farm commission reporting.

Authentication: API key on every request (``key`` query parameter), plus a
session token (``Authorization: Bearer``) obtained from the login call.
Base URL: https://api2.okanjo.com

Responses come wrapped as ``{"statusCode": ..., "data": ...}``; the client
returns the ``data`` part.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from .okanjo_config import OkanjoConfig

logger = logging.getLogger(__name__)


class OkanjoAuthenticationError(Exception):
    """Raised when login is rejected or the session response is unusable."""
    pass


class OkanjoAPIError(Exception):
    """Raised when the Okanjo API returns a non-success response."""
    pass


@dataclass(frozen=True)
class OkanjoSession:
    """Account + session objects returned by a successful login."""
    account: Dict[str, Any]
    session: Dict[str, Any]

    @property
    def account_id(self) -> str:
        return self.account["id"]

    @property
    def session_id(self) -> str:
        return self.session["id"]

    @property
    def token(self) -> str:
        return self.session["token"]


def _error_detail(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500]
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)


def _unwrap(body: Any) -> Any:
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


class OkanjoClient:
    SESSIONS_ENDPOINT = "/accounts/sessions"
    SESSION_ENDPOINT = "/accounts/{account_id}/sessions/{session_id}"
    COMMISSION_REPORT_ENDPOINT = "/farm/reporting/commissions"

    def __init__(self, config: OkanjoConfig) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")

        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def _scrub(self, text: str) -> str:
        # request URLs carry the API key as ?key=
        if self.config.api_key:
            text = text.replace(self.config.api_key, "***")
        return text

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        url = f"{self.base_url}{endpoint}"
        query: Dict[str, Any] = {"key": self.config.api_key}
        if params:
            query.update(params)

        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug(f"{method} {endpoint}")
        return self._session.request(
            method,
            url,
            params=query,
            json=json,
            headers=headers,
            timeout=self.config.timeout_s,
        )

    def create_session(self, email: str, password: str) -> OkanjoSession:
        """
        Log in and return the account + session pair.

        POST /accounts/sessions

        Raises:
            OkanjoAuthenticationError: on rejected credentials, any request
                failure, or a response without account/session/token
        """
        try:
            resp = self._request(
                "POST",
                self.SESSIONS_ENDPOINT,
                json={"email": email, "password": password},
            )
            resp.raise_for_status()
            body = resp.json()
        except requests.exceptions.HTTPError:
            raise OkanjoAuthenticationError(
                f"Okanjo login failed ({resp.status_code}): {self._scrub(_error_detail(resp))}"
            ) from None
        except ValueError:
            raise OkanjoAuthenticationError("Okanjo login returned an invalid JSON response") from None
        except requests.exceptions.RequestException as e:
            raise OkanjoAuthenticationError(f"Failed to connect to Okanjo API: {self._scrub(str(e))}") from None

        data = _unwrap(body)
        account = data.get("account") if isinstance(data, dict) else None
        session = data.get("session") if isinstance(data, dict) else None
        if not account or not session or not session.get("token") or not account.get("id"):
            raise OkanjoAuthenticationError("Okanjo login response missing account/session token")

        result = OkanjoSession(account=account, session=session)
        logger.info(f"Created Okanjo session {result.session_id} for account {result.account_id}")
        return result

    def delete_session(self, account_id: str, session_id: str, token: str) -> None:
        """
        Revoke a session.

        DELETE /accounts/{account_id}/sessions/{session_id}
        """
        endpoint = self.SESSION_ENDPOINT.format(account_id=account_id, session_id=session_id)
        try:
            resp = self._request("DELETE", endpoint, token=token)
            resp.raise_for_status()
        except requests.exceptions.HTTPError:
            raise OkanjoAPIError(
                f"Okanjo session delete failed ({resp.status_code}): {self._scrub(_error_detail(resp))}"
            ) from None
        except requests.exceptions.RequestException as e:
            raise OkanjoAPIError(f"Failed to connect to Okanjo API: {self._scrub(str(e))}") from None

        logger.info(f"Deleted Okanjo session {session_id}")

    def commission_report(
        self,
        token: str,
        *,
        start: str,
        end: str,
        **filters: Any,
    ) -> List[Dict[str, Any]]:
        """
        Fetch the farm commission report for [start, end).

        GET /farm/reporting/commissions?start=...&end=...

        Args:
            token: session token from create_session
            start: ISO 8601 UTC start (inclusive)
            end: ISO 8601 UTC end (exclusive)
            **filters: optional report filters, e.g. instance_ids=[...].
                List values are sent comma-joined; None values are dropped.

        Returns:
            List of commission records, as returned by the API

        Raises:
            OkanjoAPIError: on non-success responses or a non-list payload
        """
        params: Dict[str, Any] = {"start": start, "end": end}
        for name, value in filters.items():
            if value is None:
                continue
            if isinstance(value, (list, tuple, set)):
                value = ",".join(str(v) for v in value)
            params[name] = value

        try:
            resp = self._request("GET", self.COMMISSION_REPORT_ENDPOINT, token=token, params=params)
            resp.raise_for_status()
            body = resp.json()
        except requests.exceptions.HTTPError:
            raise OkanjoAPIError(
                f"Okanjo commission report failed ({resp.status_code}): {self._scrub(_error_detail(resp))}"
            ) from None
        except ValueError:
            raise OkanjoAPIError("Okanjo commission report returned an invalid JSON response") from None
        except requests.exceptions.RequestException as e:
            raise OkanjoAPIError(f"Failed to connect to Okanjo API: {self._scrub(str(e))}") from None

        data = _unwrap(body)
        if not isinstance(data, list):
            raise OkanjoAPIError(f"Unexpected commission report payload: {type(data).__name__}")
        return data
