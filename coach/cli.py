from __future__ import annotations

import argparse
import logging
import asyncio
import sys
from typing import Callable, List, Optional

from dotenv import load_dotenv

from coach.client import InterviewSession
from coach.core.options import DIFFICULTIES, INTERVIEW_TYPES, describe_options
from coach.core.schemas import SessionConfig
from coach.errors import CoachError


COMMANDS = {
    "/hint": "hint",
    "/skip": "skip",
    "/analyze": "analyze",
}

HELP_TEXT = "Commands: /hint /skip /analyze /restart /quit"


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Practice a mock interview in the terminal",
        epilog=describe_options(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--type",
        dest="focus_area",
        default="General",
        help=f"Interview type, e.g. one of: {', '.join(INTERVIEW_TYPES)} (default: General)",
    )
    parser.add_argument(
        "--level",
        default="Mid-Level",
        help=f"Target role level, e.g. one of: {', '.join(DIFFICULTIES)} (default: Mid-Level)",
    )
    parser.add_argument(
        "--gateway-url",
        default=None,
        help="Base URL of the chat gateway (default: GATEWAY_URL or http://127.0.0.1:8000).",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: .env). Use empty to disable.",
    )
    return parser.parse_args(argv)


async def handle_line(session: InterviewSession, line: str, emit: Callable[[str], None]) -> bool:
    """Run one line of user input. Returns False when the user quits."""
    line = line.strip()
    if not line:
        return True
    if line == "/quit":
        return False
    if line == "/restart":
        session.restart_session()
        emit(f"Coach: {session.transcript[-1].content}")
        return True

    try:
        if line in COMMANDS:
            reply = await session.trigger_auxiliary_action(COMMANDS[line])
        elif line.startswith("/"):
            emit(HELP_TEXT)
            return True
        else:
            reply = await session.submit_turn(line)
    except CoachError as e:
        emit(f"[{e}]")
        return True

    emit(f"Coach: {reply.content}")
    return True


async def run(
    session: InterviewSession,
    read_line: Callable[[str], str] = input,
    emit: Callable[[str], None] = print,
) -> None:
    emit(f"{session.config.level} {session.config.focus_area} interview. {HELP_TEXT}")
    emit(f"Coach: {session.transcript[0].content}")
    try:
        while True:
            try:
                line = await asyncio.to_thread(read_line, "You: ")
            except EOFError:
                break
            if not await handle_line(session, line, emit):
                break
    finally:
        await session.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.WARNING, format="[%(asctime)s] %(levelname)s - %(message)s")
    if args.env_file:
        load_dotenv(args.env_file)

    config = SessionConfig(focus_area=args.focus_area, level=args.level)
    session = InterviewSession.connect(config, base_url=args.gateway_url)
    try:
        asyncio.run(run(session))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
