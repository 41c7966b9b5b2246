from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from coach.core.prompt import build_system_prompt
from coach.core.schemas import Message, SessionConfig
from coach.errors import MissingCredentialError, ProviderError
from config.settings import Settings


logger = logging.getLogger("interview_coach.gateway")

ChatModelFactory = Callable[..., BaseChatModel]

_LC_CLASSES = {
    "system": SystemMessage,
    "user": HumanMessage,
    "assistant": AIMessage,
}


def to_lc_messages(messages: Sequence[Message]) -> List[BaseMessage]:
    return [_LC_CLASSES[m.role](content=m.content) for m in messages]


def build_chat_model(
    *,
    model: str,
    api_key: str,
    temperature: float,
    top_p: float,
    timeout: Optional[float] = None,
) -> BaseChatModel:
    kwargs: dict = {}
    if timeout is not None:
        kwargs["timeout"] = timeout
    return ChatGoogleGenerativeAI(
        model=model,
        google_api_key=api_key,
        temperature=temperature,
        top_p=top_p,
        max_retries=1,  # single attempt
        **kwargs,
    )


def _reply_text(result: Any) -> str:
    content = getattr(result, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text") or "")
            else:
                raise ProviderError(f"Unexpected content part from model: {type(part).__name__}")
        return "".join(parts)
    raise ProviderError(f"Malformed model response: {type(result).__name__}")


class CompletionGateway:
    """Turns a transcript plus session config into one chat model call.

    Holds no conversation state; the caller resends the whole transcript
    every turn. The credential is injected here and checked on each call so
    a missing key degrades to an error response instead of a failed start.
    """

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.3,
        top_p: float = 0.9,
        timeout: Optional[float] = None,
        chat_model_factory: Optional[ChatModelFactory] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.top_p = top_p
        self.timeout = timeout
        self._factory = chat_model_factory or build_chat_model

    @classmethod
    def from_settings(
        cls, settings: Settings, chat_model_factory: Optional[ChatModelFactory] = None
    ) -> "CompletionGateway":
        return cls(
            settings.google_api_key,
            model=settings.gemini_model,
            temperature=settings.temperature,
            top_p=settings.top_p,
            timeout=settings.model_timeout,
            chat_model_factory=chat_model_factory,
        )

    @property
    def credential_configured(self) -> bool:
        return bool(self.api_key)

    def build_messages(self, transcript: Sequence[Message], config: SessionConfig) -> List[BaseMessage]:
        system = SystemMessage(content=build_system_prompt(config))
        return [system, *to_lc_messages(transcript)]

    def handle_turn(self, transcript: Sequence[Message], config: SessionConfig) -> str:
        if not self.api_key:
            raise MissingCredentialError()

        messages = self.build_messages(transcript, config)
        logger.info(
            "Completion request: model=%s type=%r level=%r messages=%s",
            self.model,
            config.focus_area,
            config.level,
            len(messages),
        )

        try:
            llm = self._factory(
                model=self.model,
                api_key=self.api_key,
                temperature=self.temperature,
                top_p=self.top_p,
                timeout=self.timeout,
            )
            result = llm.invoke(messages)
            text = _reply_text(result)
        except ProviderError as exc:
            logger.error("Unusable chat model reply: %s", exc)
            raise
        except Exception as exc:
            logger.exception("Chat model call failed: %s", exc)
            raise ProviderError(str(exc) or type(exc).__name__) from exc

        logger.info("Model responded with %s chars", len(text))
        return text
