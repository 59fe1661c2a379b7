# agent_relay/relay.py

"""Two-party conversation relay.

Drives a strictly alternating exchange between two A2A agents: the seed
message goes to the first agent, its reply goes to the second agent, the
second agent's reply goes back to the first, and so on, until either agent
stops replying or the turn limit is reached.
"""

import asyncio
import enum
import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol, Sequence
from uuid import uuid4

from .common_types import (
    A2AClientError,
    AgentCard,
    Message,
    Part,
    Task,
    TaskSendParams,
    TextPart,
)

logger = logging.getLogger(__name__)


class SetupFailure(Exception):
    """The conversation cannot start: no seed message, or an agent card is unavailable."""


class TaskClient(Protocol):
    async def send_task(self, payload: TaskSendParams) -> Task | None: ...

    async def get_agent_card(self) -> AgentCard: ...


class ConversationObserver(Protocol):
    """Receives the exchanged messages for display. Has no say in the relay."""

    def seed(self, recipient: str, message: Message) -> None: ...

    def reply(self, index: int, sender: str, message: Message) -> None: ...

    def no_reply(self, index: int, sender: str) -> None: ...


@dataclass
class Participant:
    name: str
    client: TaskClient


class RelayStatus(str, enum.Enum):
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class ConversationState:
    conversation_id: str
    last_message: Message
    last_sender: str = "user"
    turn_count: int = 0
    # One session per participant, in participant order.
    session_ids: list[str | None] = field(default_factory=lambda: [None, None])
    status: RelayStatus = RelayStatus.RUNNING


def get_text_from_parts(parts: Sequence[Part]) -> str:
    """Renders message parts as one display string.

    Text parts contribute their text; any other part shows up as
    ``[<type> part]``. The result is lossy and meant for display only.
    """
    rendered = []
    for part in parts:
        if isinstance(part, TextPart):
            rendered.append(part.text)
        else:
            rendered.append(f"[{getattr(part, 'type', None) or 'unknown'} part]")
    return " ".join(rendered)


def text_message(text: str, role: str = "user") -> Message:
    return Message(role=role, parts=[TextPart(text=text)])


async def fetch_agent_cards(first: TaskClient, second: TaskClient) -> tuple[AgentCard, AgentCard]:
    """Fetches both agent cards concurrently.

    Raises:
        SetupFailure: If either card cannot be fetched.
    """
    try:
        first_card, second_card = await asyncio.gather(
            first.get_agent_card(),
            second.get_agent_card(),
        )
    except (A2AClientError, ValueError) as e:
        logger.error(f"Failed to fetch agent card(s): {e}")
        raise SetupFailure(f"Failed to fetch agent card(s): {e}") from e
    return first_card, second_card


class ConversationRelay:
    """Relays messages between two participants for a bounded number of turns.

    A turn is one full round: a message to the first participant and its
    reply forwarded to the second. Only rounds where both participants
    replied are counted.
    """

    def __init__(
        self,
        observer: ConversationObserver | None = None,
        conversation_id_factory: Callable[[], str] = lambda: uuid4().hex,
    ):
        self.observer = observer
        self.conversation_id_factory = conversation_id_factory
        self.state: ConversationState | None = None

    async def run(
        self,
        first: Participant,
        second: Participant,
        seed_message: Message | None,
        max_turns: int,
    ) -> int:
        """Runs the conversation and returns the number of completed turns.

        Raises:
            SetupFailure: If no seed message is given.
            ValueError: If max_turns is negative.
        """
        if seed_message is None:
            raise SetupFailure("No initial message provided")
        if max_turns < 0:
            raise ValueError(f"max_turns must be non-negative, got {max_turns}")

        state = ConversationState(
            conversation_id=self.conversation_id_factory(),
            last_message=seed_message,
        )
        self.state = state
        logger.info(
            f"Starting conversation {state.conversation_id} between "
            f"{first.name} and {second.name} for up to {max_turns} turns"
        )
        if self.observer is not None:
            self.observer.seed(first.name, seed_message)

        while state.turn_count < max_turns:
            first_reply = await self._exchange(state, 0, first, state.last_message)
            if first_reply is None:
                break

            second_reply = await self._exchange(state, 1, second, first_reply)
            if second_reply is None:
                break

            state.last_message = second_reply
            state.last_sender = second.name
            state.turn_count += 1

        state.status = RelayStatus.ENDED
        logger.info(f"Conversation {state.conversation_id} ended after {state.turn_count} turns")
        return state.turn_count

    async def _exchange(
        self,
        state: ConversationState,
        index: int,
        participant: Participant,
        message: Message,
    ) -> Message | None:
        """Sends one message and returns the participant's reply, if any."""
        params = TaskSendParams(
            id=state.conversation_id,
            sessionId=state.session_ids[index],
            message=message,
        )
        logger.debug(f"Turn {state.turn_count}: sending to {participant.name} (session {params.sessionId})")
        task = await participant.client.send_task(params)

        state.session_ids[index] = task.sessionId if task is not None else None
        reply = task.status.message if task is not None else None
        if reply is None:
            logger.info(f"{participant.name} did not reply on turn {state.turn_count}")
            if self.observer is not None:
                self.observer.no_reply(index, participant.name)
            return None

        if self.observer is not None:
            self.observer.reply(index, participant.name, reply)
        return reply
