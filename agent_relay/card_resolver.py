# agent_relay/card_resolver.py

import json
import logging

import httpx
from pydantic import ValidationError

from .common_types import AgentCard, A2AClientConnectionError, A2AClientHTTPError, A2AClientJSONError

logger = logging.getLogger(__name__)

AGENT_CARD_PATH = "/.well-known/agent.json"


class A2ACardResolver:
    def __init__(
        self,
        base_url: str,
        agent_card_path: str = AGENT_CARD_PATH,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        # Ensure base_url doesn't have a trailing slash for clean joining
        self.base_url = base_url.rstrip('/')
        self.agent_card_path = '/' + agent_card_path.lstrip('/')
        self.timeout = httpx.Timeout(timeout, connect=5.0)
        self._transport = transport

    async def get_agent_card(self) -> AgentCard:
        url = f"{self.base_url}{self.agent_card_path}"
        logger.info(f"Fetching agent card from {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                logger.debug(f"Received status code {response.status_code} from {url}")
                response.raise_for_status()
                card_data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching agent card from {url}: {e}")
            raise A2AClientHTTPError(e.response.status_code, str(e)) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error(f"Error fetching agent card from {url}: {e}")
            raise A2AClientConnectionError(str(e)) from e
        except json.JSONDecodeError as e:
            logger.error(f"Agent card at {url} is not valid JSON: {e}")
            raise A2AClientJSONError(str(e)) from e

        try:
            card = AgentCard.model_validate(card_data)
        except ValidationError as e:
            logger.error(f"Invalid agent card at {url}: {e}")
            raise A2AClientJSONError(f"Could not parse agent card from {url}") from e
        logger.info(f"Received agent card for {card.name}")
        return card
