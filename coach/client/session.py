"""Client side of an interview: owns the transcript and drives turns.

The gateway keeps no memory, so every request carries the full transcript
and the session config. Only one request is outstanding at a time; a second
submission while one is pending is refused without touching the network.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import httpx

from coach.core.prompt import AUXILIARY_ACTIONS, seed_greeting
from coach.core.schemas import Message, SessionConfig
from coach.errors import ActionUnavailableError, SessionBusyError
from config.settings import get_settings


logger = logging.getLogger("interview_coach.client")

CHAT_PATH = "/api/chat"

# seed greeting + at least one answer + one reply
MIN_TRANSCRIPT_FOR_ANALYSIS = 3


@dataclass(frozen=True)
class Entry:
    message: Message
    display: str


class InterviewSession:
    def __init__(self, config: SessionConfig, http_client: httpx.AsyncClient) -> None:
        self.config = config
        self._http = http_client
        self._entries: List[Entry] = []
        self._generation = 0
        self.in_flight = False
        self._seed()

    @classmethod
    def connect(
        cls,
        config: SessionConfig,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> "InterviewSession":
        """Build a session with its own HTTP client aimed at the gateway."""
        settings = get_settings()
        http_client = httpx.AsyncClient(
            base_url=base_url or settings.gateway_url,
            timeout=timeout if timeout is not None else settings.client_timeout,
        )
        return cls(config, http_client)

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def transcript(self) -> Tuple[Message, ...]:
        return tuple(e.message for e in self._entries)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    @property
    def can_analyze(self) -> bool:
        return not self.in_flight and len(self._entries) >= MIN_TRANSCRIPT_FOR_ANALYSIS

    def restart_session(self) -> None:
        """Reset to a fresh greeting. A pending reply is dropped when it lands."""
        self._generation += 1
        self._entries = []
        self._seed()

    async def submit_turn(self, text: str) -> Message:
        text = (text or "").strip()
        if not text:
            raise ValueError("Cannot submit an empty answer")
        return await self._run_turn(Message(role="user", content=text), display=text)

    async def trigger_auxiliary_action(self, kind: str) -> Message:
        action = AUXILIARY_ACTIONS.get(kind)
        if action is None:
            raise ValueError(f"Unknown action {kind!r}; expected one of {sorted(AUXILIARY_ACTIONS)}")
        if kind == "analyze" and len(self._entries) < MIN_TRANSCRIPT_FOR_ANALYSIS:
            raise ActionUnavailableError("Answer at least one question before asking for an analysis")
        return await self._run_turn(Message(role="user", content=action.instruction), display=action.display)

    def _seed(self) -> None:
        greeting = seed_greeting(self.config)
        self._append(Message(role="assistant", content=greeting), greeting)

    def _append(self, message: Message, display: str) -> None:
        self._entries.append(Entry(message=message, display=display))

    async def _run_turn(self, outbound: Message, display: str) -> Message:
        # Check and set happen before the first await, so no other task can slip in.
        if self.in_flight:
            raise SessionBusyError("Wait for the current reply before sending another message")

        self.in_flight = True
        generation = self._generation
        self._append(outbound, display)
        payload = {
            "messages": [m.model_dump() for m in self.transcript],
            "config": self.config.to_wire(),
        }

        try:
            content = await self._request_reply(payload)
        finally:
            self.in_flight = False

        reply = Message(role="assistant", content=content)
        if generation != self._generation:
            logger.info("Discarding reply for a transcript that was restarted")
            return reply
        self._append(reply, content)
        return reply

    async def _request_reply(self, payload: dict) -> str:
        try:
            response = await self._http.post(CHAT_PATH, json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Chat request failed: %s", exc)
            return _error_bubble(str(exc) or type(exc).__name__)

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.is_success:
            detail = data.get("error") if isinstance(data, dict) else None
            logger.warning("Gateway answered %s: %s", response.status_code, detail)
            return _error_bubble(detail or "API Failed")

        if not isinstance(data, dict) or not isinstance(data.get("reply"), str):
            logger.warning("Gateway sent an unreadable body")
            return _error_bubble("Malformed reply from server")
        return data["reply"]


def _error_bubble(detail: str) -> str:
    return f"Error: {detail}. Please try again."
