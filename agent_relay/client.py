# agent_relay/client.py

import json
import logging

import httpx
from pydantic import ValidationError

from .card_resolver import AGENT_CARD_PATH, A2ACardResolver
from .common_types import (
    A2AClientConnectionError,
    A2AClientHTTPError,
    A2AClientJSONError,
    A2AClientJSONRPCError,
    AgentCard,
    SendTaskRequest,
    SendTaskResponse,
    Task,
    TaskSendParams,
)

# Setup logger for this module
logger = logging.getLogger(__name__)


class A2AClient:
    """Client for interacting with a remote A2A agent."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        agent_card_path: str = AGENT_CARD_PATH,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initializes the A2AClient.

        Args:
            base_url: The base URL of the remote agent (e.g., http://127.0.0.1:5000).
            timeout: Default timeout in seconds for requests.
            agent_card_path: Path of the agent card, relative to base_url.
            transport: Optional httpx transport, used instead of the network.
        """
        if not base_url:
            raise ValueError("base_url cannot be empty")
        self.base_url = base_url.rstrip('/')  # Remove trailing slash if present
        self.timeout_config = httpx.Timeout(timeout, connect=5.0)
        self._transport = transport
        self.card_resolver = A2ACardResolver(
            self.base_url,
            agent_card_path=agent_card_path,
            timeout=timeout,
            transport=transport,
        )
        logger.info(f"A2AClient initialized for base URL: {self.base_url}")

    async def _send_request(self, method: str, path: str, json_data: dict | None = None) -> dict:
        """Sends an HTTP request to the specified path on the remote agent.

        Args:
            method: HTTP method ("GET" or "POST").
            path: The API path, relative to base_url. Empty or starting with '/'.
            json_data: Optional dictionary payload for POST requests.

        Returns:
            The JSON response dictionary from the agent.

        Raises:
            A2AClientHTTPError: If the agent returns a 4xx or 5xx status.
            A2AClientConnectionError: If a connection-level error occurs.
            A2AClientJSONError: If the body is not a JSON object.
            ValueError: If the path is invalid or method is unsupported.
        """
        if path and not path.startswith('/'):
            logger.error(f"Invalid path provided to _send_request: '{path}'")
            raise ValueError("API path must be empty or start with '/'")

        url = f"{self.base_url}{path}"
        logger.info(f"Sending A2A request: {method.upper()} {url}")
        if json_data:
            logger.debug(f"Request payload: {json_data}")

        async with httpx.AsyncClient(timeout=self.timeout_config, transport=self._transport) as client:
            try:
                if method.upper() == "POST":
                    response = await client.post(url, json=json_data)
                elif method.upper() == "GET":
                    response = await client.get(url)
                else:
                    logger.error(f"Unsupported HTTP method requested: {method}")
                    raise ValueError(f"Unsupported HTTP method: {method}")

                logger.debug(f"A2A Response Status for {method.upper()} {url}: {response.status_code}")
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                logger.error(f"HTTP error {e.response.status_code} for URL {e.request.url}: {e}", exc_info=True)
                raise A2AClientHTTPError(e.response.status_code, str(e)) from e
            except httpx.RequestError as e:
                logger.error(f"Request error for URL {e.request.url}: {e}", exc_info=True)
                raise A2AClientConnectionError(str(e)) from e
            except httpx.InvalidURL as e:
                logger.error(f"Invalid URL {url}: {e}")
                raise A2AClientConnectionError(str(e)) from e

        if response.status_code == 204 or not response.content:
            logger.warning(f"Received empty response body for {method.upper()} {url} (Status: {response.status_code})")
            return {}

        try:
            body = response.json()
        except json.JSONDecodeError as e:
            logger.error(f"Response from {url} is not valid JSON: {e}")
            raise A2AClientJSONError(str(e)) from e
        if not isinstance(body, dict):
            raise A2AClientJSONError(f"Expected a JSON object from {url}, got {type(body).__name__}")
        return body

    async def send_task(self, payload: TaskSendParams | dict) -> Task | None:
        """Sends a tasks/send JSON-RPC request to the remote agent.

        Args:
            payload: TaskSendParams, or a dictionary conforming to it.

        Returns:
            The Task returned by the agent, or None if the agent returned no result.

        Raises:
            A2AClientJSONRPCError: If the agent answers with a JSON-RPC error.
            A2AClientJSONError: If the response format from the agent is invalid.
            A2AClientHTTPError: For HTTP errors from the agent.
            A2AClientConnectionError: For connection errors.
        """
        params = payload if isinstance(payload, TaskSendParams) else TaskSendParams.model_validate(payload)
        request = SendTaskRequest(params=params)
        logger.info(f"Sending task request {request.id} for task {params.id}")

        response_json = await self._send_request(
            method="POST", path="", json_data=request.model_dump(mode="json", exclude_none=True)
        )

        try:
            response = SendTaskResponse.model_validate(response_json)
        except ValidationError as e:
            logger.exception(f"Failed to parse SendTaskResponse. Response JSON: {response_json}")
            raise A2AClientJSONError("Invalid response format received from agent for send_task") from e

        if response.error is not None:
            logger.error(f"Agent returned JSON-RPC error for task {params.id}: {response.error.message}")
            raise A2AClientJSONRPCError(response.error)

        if response.result is None:
            logger.info(f"Agent returned no task for {params.id}")
        else:
            logger.info(f"Received task {response.result.id} in state {response.result.status.state.value}")
        return response.result

    async def get_agent_card(self) -> AgentCard:
        """Fetches the agent card from the remote agent."""
        return await self.card_resolver.get_agent_card()
