"""
GA4GH Workflow Execution Service client.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from gh_trs.clients.remote import network_retry
from gh_trs.exceptions import WesError
from gh_trs.models.wes import RunStatus

logger = logging.getLogger(__name__)


class WesClient:
    """
    Client for the subset of the WES API that testing needs.

    Args:
        location: Base URL of the WES, e.g. ``http://localhost:1122``
        timeout: Request timeout in seconds
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        location: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.location = location.strip().rstrip("/")
        self._client = httpx.Client(
            base_url=self.location,
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "WesClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _json(response: httpx.Response, action: str) -> Any:
        if not response.is_success:
            raise WesError(
                f"Failed to {action} with status: {response.status_code} "
                f"from {response.request.url}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise WesError(f"Failed to parse the response when trying to {action}") from e

    @network_retry
    def _get(self, path: str, action: str) -> Any:
        return self._json(self._client.get(path), action)

    def get_supported_wes_versions(self) -> list[str]:
        body = self._get("/service-info", "get service-info")
        versions = body.get("supported_wes_versions") if isinstance(body, dict) else None
        if not isinstance(versions, list):
            raise WesError("Failed to parse the response when getting service-info")
        return [str(v) for v in versions]

    def post_run(self, form: dict[str, str]) -> str:
        """
        Submit a run as ``multipart/form-data``.

        Args:
            form: Form fields, all plain text

        Returns:
            The WES run id
        """
        logger.debug(f"Run form:\n{json.dumps(form, indent=2)}")
        response = self._client.post(
            "/runs",
            files={key: (None, value) for key, value in form.items()},
        )
        body = self._json(response, "post run")
        run_id = body.get("run_id") if isinstance(body, dict) else None
        if not run_id:
            raise WesError("Failed to parse the response when posting run")
        return run_id

    def get_run_status(self, run_id: str) -> RunStatus:
        body = self._get(f"/runs/{run_id}/status", "get run status")
        state = body.get("state") if isinstance(body, dict) else None
        if state is None:
            raise WesError("Failed to parse the response when getting run status")
        try:
            return RunStatus.from_wes_state(state)
        except ValueError as e:
            raise WesError(str(e)) from e

    def get_run_log(self, run_id: str) -> dict[str, Any]:
        return self._get(f"/runs/{run_id}", "get run log")
