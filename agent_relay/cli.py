# agent_relay/cli.py

"""Command line entry point: relay a conversation between two A2A agents."""

import argparse
import asyncio
import logging
import sys

import httpx
from rich.console import Console

from .client import A2AClient
from .common_types import A2AClientError
from .config import RelaySettings, parse_max_turns, parse_timeout
from .relay import ConversationRelay, Participant, SetupFailure, fetch_agent_cards, text_message
from .transcript import RichTranscript

logger = logging.getLogger(__name__)


def _argument_type(parse):
    def convert(value: str):
        try:
            return parse(value)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from None

    convert.__name__ = parse.__name__
    return convert


def build_parser(defaults: RelaySettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agent-relay",
        description="Relay a conversation between two A2A agents and print the transcript.",
    )
    parser.add_argument(
        "--agent1",
        default=defaults.agent1_url,
        required=defaults.agent1_url is None,
        help="URL of the first agent (A2A server)",
    )
    parser.add_argument(
        "--agent2",
        default=defaults.agent2_url,
        required=defaults.agent2_url is None,
        help="URL of the second agent (A2A server)",
    )
    parser.add_argument(
        "--init-message",
        default=defaults.init_message,
        help="Initial message to start the conversation",
    )
    parser.add_argument(
        "--max-turns",
        type=_argument_type(parse_max_turns),
        default=defaults.max_turns,
        help=f"Maximum number of conversation turns (default: {defaults.max_turns})",
    )
    parser.add_argument(
        "--timeout",
        type=_argument_type(parse_timeout),
        default=defaults.timeout,
        help=f"HTTP timeout in seconds (default: {defaults.timeout})",
    )
    parser.add_argument("--plain", action="store_true", help="Disable colored output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


async def run_conversation(
    settings: RelaySettings,
    transcript: RichTranscript,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """Fetches both cards, runs the relay and returns the process exit status."""
    transcript.settings(settings.agent1_url, settings.agent2_url, settings.init_message, settings.max_turns)

    agent1_client = A2AClient(settings.agent1_url, timeout=settings.timeout, transport=transport)
    agent2_client = A2AClient(settings.agent2_url, timeout=settings.timeout, transport=transport)

    try:
        agent1_card, agent2_card = await fetch_agent_cards(agent1_client, agent2_client)
    except SetupFailure as e:
        transcript.error(str(e))
        return 1
    transcript.cards(agent1_card, agent2_card)

    agent1 = Participant(name=agent1_card.name or "Agent 1", client=agent1_client)
    agent2 = Participant(name=agent2_card.name or "Agent 2", client=agent2_client)
    seed = text_message(settings.init_message) if settings.init_message else None

    relay = ConversationRelay(observer=transcript)
    try:
        turns = await relay.run(agent1, agent2, seed, settings.max_turns)
    except (SetupFailure, ValueError) as e:
        transcript.error(f"{e}. Exiting.")
        return 1
    except A2AClientError as e:
        logger.exception("Error in conversation loop")
        transcript.error(f"Error in conversation loop: {e}")
        return 1

    transcript.ended(turns)
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        defaults = RelaySettings.from_env()
    except ValueError as e:
        build_parser(RelaySettings()).error(str(e))
    args = build_parser(defaults).parse_args(argv)
    setup_logging(args.debug)

    settings = RelaySettings(
        agent1_url=args.agent1,
        agent2_url=args.agent2,
        init_message=args.init_message,
        max_turns=args.max_turns,
        timeout=args.timeout,
    )
    transcript = RichTranscript(
        console=Console(no_color=args.plain),
        err_console=Console(stderr=True, no_color=args.plain),
    )
    return asyncio.run(run_conversation(settings, transcript))


if __name__ == "__main__":
    sys.exit(main())
