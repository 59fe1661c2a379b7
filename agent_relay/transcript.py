# agent_relay/transcript.py

from rich.console import Console
from rich.text import Text

from .common_types import AgentCard, Message
from .relay import get_text_from_parts

USER_STYLE = "green"
# One style per participant, in participant order.
PARTICIPANT_STYLES = ("cyan", "yellow")


class RichTranscript:
    """Prints the conversation to a rich console, one color per agent."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def settings(self, agent1: str, agent2: str, init_message: str | None, max_turns: int) -> None:
        self.console.print("Parsed arguments:")
        self.console.print(f"Agent 1 URL: {agent1}", markup=False)
        self.console.print(f"Agent 2 URL: {agent2}", markup=False)
        self.console.print(f"Init message: {init_message if init_message is not None else '(none)'}", markup=False)
        self.console.print(f"Max turns: {max_turns}")

    def cards(self, first: AgentCard, second: AgentCard) -> None:
        for card in (first, second):
            self.console.print()
            self.console.print(Text(f"{card.name} Card:", style="bold"))
            self.console.print_json(card.model_dump_json(exclude_none=True))

    def seed(self, recipient: str, message: Message) -> None:
        line = Text()
        line.append(f"[User -> {recipient}]", style=USER_STYLE)
        line.append(f": {get_text_from_parts(message.parts)}")
        self.console.print()
        self.console.print(line)

    def reply(self, index: int, sender: str, message: Message) -> None:
        self.console.print()
        self.console.print(
            Text(f"[{sender}]: {get_text_from_parts(message.parts)}", style=PARTICIPANT_STYLES[index])
        )

    def no_reply(self, index: int, sender: str) -> None:
        self.console.print(
            Text(f"[{sender}] No reply. Ending conversation.", style=PARTICIPANT_STYLES[index])
        )

    def ended(self, turns: int) -> None:
        self.console.print()
        self.console.print(f"Conversation ended after {turns} turns.")

    def error(self, message: str) -> None:
        self.err_console.print(Text(message, style="bold red"))
