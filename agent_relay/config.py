# agent_relay/config.py

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

DEFAULT_MAX_TURNS = 10
DEFAULT_TIMEOUT = 30.0


def parse_max_turns(value: str) -> int:
    try:
        number = int(value, 10)
    except ValueError:
        raise ValueError(f"invalid integer value: {value!r}") from None
    if number < 0:
        raise ValueError(f"must be non-negative, got {number}")
    return number


def parse_timeout(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise ValueError(f"invalid number: {value!r}") from None
    if number <= 0:
        raise ValueError(f"must be positive, got {number}")
    return number


@dataclass
class RelaySettings:
    """Everything the command line needs to start a conversation."""

    agent1_url: str | None = None
    agent2_url: str | None = None
    init_message: str | None = None
    max_turns: int = DEFAULT_MAX_TURNS
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RelaySettings":
        """Reads defaults from A2A_* environment variables (and a .env file).

        Raises:
            ValueError: If A2A_MAX_TURNS or A2A_TIMEOUT is malformed.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        max_turns = DEFAULT_MAX_TURNS
        if environ.get("A2A_MAX_TURNS"):
            try:
                max_turns = parse_max_turns(environ["A2A_MAX_TURNS"])
            except ValueError as e:
                raise ValueError(f"A2A_MAX_TURNS: {e}") from None

        timeout = DEFAULT_TIMEOUT
        if environ.get("A2A_TIMEOUT"):
            try:
                timeout = parse_timeout(environ["A2A_TIMEOUT"])
            except ValueError as e:
                raise ValueError(f"A2A_TIMEOUT: {e}") from None

        return cls(
            agent1_url=environ.get("A2A_AGENT1_URL") or None,
            agent2_url=environ.get("A2A_AGENT2_URL") or None,
            init_message=environ.get("A2A_INIT_MESSAGE") or None,
            max_turns=max_turns,
            timeout=timeout,
        )
