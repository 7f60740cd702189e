"""Commands API client.

A thin wrapper around the REST endpoints under ``/api/v1/commands``
using the ``requests`` library.  Every method returns a tuple
``(data, error)``: on success ``error`` is ``None``; on failure
``data`` is empty and ``error`` is a dictionary with the keys
``status_code``, ``message`` and ``errors`` (the validation messages
returned with HTTP 400, otherwise an empty list).

The client supports optional authentication via a bearer token which
will be sent in the ``Authorization`` header.  Reads work without a
token; creating, updating and deleting require one::

    client = CommandsClient(base_url="http://localhost:8000", api_key=token)
    created, error = client.create_command("List files", "linux", "ls -la")
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

COMMANDS_PATH = "/api/v1/commands"


class CommandsClient:
    """Client for the Commands API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            api_key: Optional bearer token.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[requests.Response], Optional[Dict[str, Any]]]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(response, error)``.  ``response`` is the
            successful response; on failure it is ``None`` and
            ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response, None
        except requests.HTTPError as exc:
            return None, self._http_error(exc)
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": []}

    @staticmethod
    def _http_error(exc: requests.HTTPError) -> Dict[str, Any]:
        response = exc.response
        status = response.status_code if response is not None else None
        message = ""
        errors: List[str] = []
        if response is not None:
            try:
                err_json = response.json()
            except ValueError:
                message = response.text
            else:
                if isinstance(err_json, dict):
                    errors = list(err_json.get("errors") or [])
                    message = err_json.get("detail") or "; ".join(errors) or str(err_json)
                else:
                    message = str(err_json)
        if not message:
            message = str(exc)
        logger.error("API request failed (%s): %s", status, message)
        return {"status_code": status, "message": message, "errors": errors}

    @staticmethod
    def _body(how_to: str, platform: str, command_line: str) -> Dict[str, str]:
        return {"howTo": how_to, "platform": platform, "commandLine": command_line}

    # ------------------------------------------------------------------
    # Command operations
    # ------------------------------------------------------------------
    def list_commands(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve all stored commands."""
        response, error = self._request("GET", COMMANDS_PATH)
        if error:
            return [], error
        data = response.json()
        return (data if isinstance(data, list) else []), None

    def get_command(self, command_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve a single command by ID."""
        response, error = self._request("GET", f"{COMMANDS_PATH}/{command_id}")
        if error:
            return None, error
        return response.json(), None

    def create_command(
        self, how_to: str, platform: str, command_line: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Create a command and return it as stored by the server."""
        response, error = self._request(
            "POST", COMMANDS_PATH, json_body=self._body(how_to, platform, command_line)
        )
        if error:
            return None, error
        return response.json(), None

    def update_command(
        self, command_id: int, how_to: str, platform: str, command_line: str
    ) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Overwrite all fields of a command."""
        _, error = self._request(
            "PUT", f"{COMMANDS_PATH}/{command_id}", json_body=self._body(how_to, platform, command_line)
        )
        return error is None, error

    def delete_command(self, command_id: int) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete a command by ID."""
        _, error = self._request("DELETE", f"{COMMANDS_PATH}/{command_id}")
        return error is None, error
