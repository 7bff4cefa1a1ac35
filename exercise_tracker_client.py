"""Exercise tracker API client.

A small wrapper around the HTTP API served by ``exercise_tracker_api``.
It uses the ``requests`` library and exposes one method per operation:

* :meth:`create_user` – find or create a user by username.
* :meth:`list_users` – list every user.
* :meth:`add_exercise` – log an exercise for a user.
* :meth:`list_exercises` – list a user's exercises.
* :meth:`get_log` – fetch a user's log with optional ``from``/``to``/``limit``.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is ``None`` (or an empty list for list
operations) and ``error`` is a dictionary with ``status_code`` and
``message``.  The server reports failures as ``{"error": "..."}`` and
that text is used as the message.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class ExerciseTrackerAPI:
    """Client for the exercise tracker API."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:3000``.
            timeout: Seconds to wait for each response.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        data: Dict[str, Any] | None = None,
    ) -> Result:
        """Perform an HTTP request to the API.

        ``data`` is sent URL‑encoded, the way the landing page's forms
        submit it.  ``None`` values are dropped from ``params`` and
        ``data`` so that optional fields are simply omitted.
        """
        url = f"{self.base_url}{path}"
        if params is not None:
            params = {key: value for key, value in params.items() if value is not None}
        if data is not None:
            data = {key: value for key, value in data.items() if value is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                data=data,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def create_user(self, username: str) -> Result:
        """Find or create the user called ``username``.

        Returns:
            A tuple ``(user, error)`` where ``user`` is ``{id, username}``.
        """
        return self._request("POST", "/api/users", data={"username": username})

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", "/api/users")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------
    def add_exercise(
        self,
        user_id: str,
        description: str,
        duration: float,
        date: Optional[str] = None,
    ) -> Result:
        """Log an exercise for ``user_id``.

        Args:
            user_id: Identifier returned by :meth:`create_user`.
            description: What was done.
            duration: Minutes spent.
            date: Optional ``yyyy-mm-dd`` date; the server uses today
                when omitted.
        """
        payload = {"description": description, "duration": duration, "date": date}
        return self._request("POST", f"/api/users/{user_id}/exercises", data=payload)

    def list_exercises(self, user_id: str) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        data, error = self._request("GET", f"/api/users/{user_id}/exercises")
        if error:
            return [], error
        return data if isinstance(data, list) else [], None

    def get_log(
        self,
        user_id: str,
        *,
        from_: Optional[str] = None,
        to: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Result:
        """Fetch the user's exercise log.

        The returned log has ``username`` set to ``None`` and no ``count``
        when none of the matched exercises belongs to a known user.
        """
        params = {"from": from_, "to": to, "limit": limit}
        return self._request("GET", f"/api/users/{user_id}/logs", params=params)
