"""HTTP client for the Gwirian REST API.

Each call issues exactly one request and returns a classified Outcome.
Failures are never raised to the caller and never retried.
"""

import json
from typing import Any

import httpx

from .errors import ApiFailure, AuthFailure, Outcome, Success, TransportFailure
from .shared.auth import request_headers
from .shared.logging import get_logger

API_PREFIX = "/api/v1"
DEFAULT_TIMEOUT = 30.0

logger = get_logger(__name__)


def parse_body(text: str) -> Any:
    """Parse a response body.

    Returns None for an empty body, the decoded JSON when valid, else the
    raw text.
    """
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def classify_response(status_code: int, reason: str, value: Any) -> Outcome:
    """Turn a completed HTTP exchange into an Outcome."""
    if status_code == 401:
        return AuthFailure()
    if not 200 <= status_code < 300:
        error = value.get("error") if isinstance(value, dict) else None
        if isinstance(error, str):
            message = error
        else:
            message = f"Request failed: {status_code} {reason}".rstrip()
        return ApiFailure(status_code=status_code, message=message, body=value)
    return Success(value)


class GwirianClient:
    """Async client for the Gwirian REST API.

    Usage:
        async with GwirianClient(base_url, token) as client:
            outcome = await client.list_projects()
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            base_url: Service URL (e.g., https://app.gwirian.com)
            token: Bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_prefix = f"{self.base_url}{API_PREFIX}"
        self.token = token
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "GwirianClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers=request_headers(self.token),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._client

    def build_url(self, path: str) -> str:
        """Join the API prefix and path. Absolute URLs pass through."""
        if path.startswith("http"):
            return path
        return f"{self.api_prefix}{path}"

    async def send(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Outcome:
        """Issue one request and classify the result.

        Args:
            method: HTTP method
            path: API path below /api/v1 (e.g., /projects) or absolute URL
            body: JSON body for POST/PATCH
            params: Query parameters

        Returns:
            Success, AuthFailure, ApiFailure or TransportFailure
        """
        client = self._ensure_client()
        url = self.build_url(path)
        logger.debug("request", method=method, url=url)
        try:
            response = await client.request(
                method,
                url,
                content=json.dumps(body) if body is not None else None,
                params=params,
            )
        except (httpx.TransportError, httpx.InvalidURL) as e:
            logger.info("transport_failure", method=method, url=url, error=str(e))
            return TransportFailure(message=str(e) or e.__class__.__name__)

        value = parse_body(response.text)
        logger.debug("response", method=method, url=url, status=response.status_code)
        return classify_response(response.status_code, response.reason_phrase, value)

    # -------------------------------------------------------------------------
    # Projects
    # -------------------------------------------------------------------------

    async def list_projects(self) -> Outcome:
        return await self.send("GET", "/projects")

    async def get_project(self, project_id: str | int) -> Outcome:
        return await self.send("GET", f"/projects/{project_id}")

    async def search_project(
        self,
        project_id: str | int,
        query: str,
        limit: int | None = None,
    ) -> Outcome:
        """Search features and scenarios in a project.

        Args:
            project_id: Project ID
            query: Search text
            limit: Maximum number of results

        Returns:
            Outcome whose success value is {"results": [...]}
        """
        params: dict[str, Any] = {"q": query}
        if limit is not None:
            params["limit"] = limit
        return await self.send("GET", f"/projects/{project_id}/search", params=params)

    # -------------------------------------------------------------------------
    # Features
    # -------------------------------------------------------------------------

    def _features_path(self, project_id: str | int) -> str:
        return f"/projects/{project_id}/features"

    async def list_features(self, project_id: str | int) -> Outcome:
        return await self.send("GET", self._features_path(project_id))

    async def get_feature(self, project_id: str | int, feature_id: str | int) -> Outcome:
        return await self.send("GET", f"{self._features_path(project_id)}/{feature_id}")

    async def create_feature(self, project_id: str | int, fields: dict[str, Any]) -> Outcome:
        return await self.send("POST", self._features_path(project_id), body={"feature": fields})

    async def update_feature(
        self, project_id: str | int, feature_id: str | int, fields: dict[str, Any]
    ) -> Outcome:
        return await self.send(
            "PATCH",
            f"{self._features_path(project_id)}/{feature_id}",
            body={"feature": fields},
        )

    async def delete_feature(self, project_id: str | int, feature_id: str | int) -> Outcome:
        return await self.send("DELETE", f"{self._features_path(project_id)}/{feature_id}")

    # -------------------------------------------------------------------------
    # Scenarios
    # -------------------------------------------------------------------------

    def _scenarios_path(self, project_id: str | int, feature_id: str | int) -> str:
        return f"{self._features_path(project_id)}/{feature_id}/scenarios"

    async def list_scenarios(self, project_id: str | int, feature_id: str | int) -> Outcome:
        return await self.send("GET", self._scenarios_path(project_id, feature_id))

    async def get_scenario(
        self, project_id: str | int, feature_id: str | int, scenario_id: str | int
    ) -> Outcome:
        return await self.send(
            "GET", f"{self._scenarios_path(project_id, feature_id)}/{scenario_id}"
        )

    async def create_scenario(
        self, project_id: str | int, feature_id: str | int, fields: dict[str, Any]
    ) -> Outcome:
        return await self.send(
            "POST",
            self._scenarios_path(project_id, feature_id),
            body={"scenario": fields},
        )

    async def update_scenario(
        self,
        project_id: str | int,
        feature_id: str | int,
        scenario_id: str | int,
        fields: dict[str, Any],
    ) -> Outcome:
        return await self.send(
            "PATCH",
            f"{self._scenarios_path(project_id, feature_id)}/{scenario_id}",
            body={"scenario": fields},
        )

    async def delete_scenario(
        self, project_id: str | int, feature_id: str | int, scenario_id: str | int
    ) -> Outcome:
        return await self.send(
            "DELETE", f"{self._scenarios_path(project_id, feature_id)}/{scenario_id}"
        )

    # -------------------------------------------------------------------------
    # Scenario executions
    # -------------------------------------------------------------------------

    def _executions_path(
        self, project_id: str | int, feature_id: str | int, scenario_id: str | int
    ) -> str:
        return (
            f"{self._scenarios_path(project_id, feature_id)}/{scenario_id}/scenario_executions"
        )

    async def list_scenario_executions(
        self, project_id: str | int, feature_id: str | int, scenario_id: str | int
    ) -> Outcome:
        return await self.send("GET", self._executions_path(project_id, feature_id, scenario_id))

    async def get_scenario_execution(
        self,
        project_id: str | int,
        feature_id: str | int,
        scenario_id: str | int,
        execution_id: str | int,
    ) -> Outcome:
        path = self._executions_path(project_id, feature_id, scenario_id)
        return await self.send("GET", f"{path}/{execution_id}")

    async def create_scenario_execution(
        self,
        project_id: str | int,
        feature_id: str | int,
        scenario_id: str | int,
        fields: dict[str, Any],
    ) -> Outcome:
        return await self.send(
            "POST",
            self._executions_path(project_id, feature_id, scenario_id),
            body={"scenario_execution": fields},
        )

    async def update_scenario_execution(
        self,
        project_id: str | int,
        feature_id: str | int,
        scenario_id: str | int,
        execution_id: str | int,
        fields: dict[str, Any],
    ) -> Outcome:
        path = self._executions_path(project_id, feature_id, scenario_id)
        return await self.send(
            "PATCH", f"{path}/{execution_id}", body={"scenario_execution": fields}
        )

    async def delete_scenario_execution(
        self,
        project_id: str | int,
        feature_id: str | int,
        scenario_id: str | int,
        execution_id: str | int,
    ) -> Outcome:
        path = self._executions_path(project_id, feature_id, scenario_id)
        return await self.send("DELETE", f"{path}/{execution_id}")
