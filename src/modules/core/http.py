"""HTTP boundary to the remote order service.

``RemoteServiceClient`` is the only place that talks to the network.
It maps every failure onto the error taxonomy in
``modules.core.exceptions`` so callers can tell a request that never
reached the remote (``TransportError``) from one the remote explicitly
rejected (``RemoteRejectedError``).

``parse_payload`` / ``parse_many`` are the validated parse step that
turns loosely-typed JSON into the typed entities the services use.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
import structlog
from pydantic import BaseModel, ValidationError

from modules.core.exceptions import (
    InvalidPayloadError,
    RemoteForbiddenError,
    RemoteNotFoundError,
    RemoteRejectedError,
    TransportError,
)

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

UNAVAILABLE_STATUS_CODES = frozenset({502, 503, 504})


class RemoteServiceClient:
    """Thin JSON client over a ``requests.Session``.

    Requests are never retried.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token or None
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token(self, token: Optional[str]) -> None:
        """Replace the bearer token sent with every request."""
        self._token = token or None

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Returns ``None`` when the response has no body.

        Raises:
            TransportError: connection failure, timeout, or 502/503/504.
            RemoteNotFoundError: the remote answered 404.
            RemoteForbiddenError: the remote answered 401 or 403.
            RemoteRejectedError: any other 4xx/5xx answer.
            InvalidPayloadError: the body is not valid JSON.
        """
        url = f"{self._base_url}/{path.lstrip('/')}"
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        log = logger.bind(method=method, path=path)
        try:
            response = self._session.request(
                method,
                url,
                json=json,
                params=params,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as exc:
            log.warning("remote.timeout", timeout=self._timeout)
            raise TransportError(f"{method} {path} timed out.") from exc
        except requests.exceptions.RequestException as exc:
            log.warning("remote.unreachable", error=str(exc))
            raise TransportError(f"{method} {path} could not reach the server.") from exc

        status_code = response.status_code
        if status_code in UNAVAILABLE_STATUS_CODES:
            log.warning("remote.unavailable", status_code=status_code)
            raise TransportError(f"{method} {path}: service unavailable ({status_code}).")

        if status_code >= 400:
            message = _error_message(response)
            log.info("remote.rejected", status_code=status_code, detail=message)
            if status_code == 404:
                raise RemoteNotFoundError(status_code, message)
            if status_code in (401, 403):
                raise RemoteForbiddenError(status_code, message)
            raise RemoteRejectedError(status_code, message)

        log.debug("remote.ok", status_code=status_code)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            log.warning("remote.invalid_json", status_code=status_code)
            raise InvalidPayloadError(f"{method} {path} returned a non-JSON body.") from exc

    def close(self) -> None:
        self._session.close()


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    reason = response.reason or "Request failed"
    return f"{reason} ({response.status_code})"


# ---------------------------------------------------------------------------
# Parse step
# ---------------------------------------------------------------------------


def parse_payload(model: Type[M], data: Any) -> M:
    """Validate one remote payload into ``model``.

    Raises:
        InvalidPayloadError: the payload does not satisfy the model.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "remote.invalid_payload",
            model=model.__name__,
            error_count=exc.error_count(),
        )
        raise InvalidPayloadError(
            f"Invalid {model.__name__} payload: {exc.error_count()} error(s)."
        ) from exc


def parse_many(model: Type[M], data: Any) -> List[M]:
    """Validate a list payload; a non-list body is itself invalid."""
    if not isinstance(data, list):
        raise InvalidPayloadError(f"Expected a list of {model.__name__} payloads.")
    return [parse_payload(model, item) for item in data]


def to_wire(value: Any) -> Any:
    """Normalise a value into JSON-compatible primitives for the remote."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_wire(item) for item in value]
    if isinstance(value, dict):
        return {key: to_wire(val) for key, val in value.items()}
    return value
