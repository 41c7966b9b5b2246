"""Unit tests for CompletionGateway."""
from __future__ import annotations

import unittest

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from coach.core.schemas import Message, SessionConfig
from coach.errors import MissingCredentialError, ProviderError
from coach.gateway import CompletionGateway, build_chat_model, to_lc_messages
from tests.fakes import RecordingChatModel, RecordingFactory


class TestCompletionGateway(unittest.TestCase):
    """Test cases for CompletionGateway.handle_turn."""

    def setUp(self):
        """Set up test fixtures."""
        self.model = RecordingChatModel()
        self.factory = RecordingFactory(self.model)
        self.gateway = CompletionGateway(
            "test-key", model="gemini-test", timeout=12.0, chat_model_factory=self.factory
        )
        self.config = SessionConfig(focus_area="System Design", level="Senior")
        self.transcript = [
            Message(role="assistant", content="Hello."),
            Message(role="user", content="I want to practice system design"),
        ]

    def test_missing_credential_makes_no_provider_call(self):
        """Test that a missing key fails before any model is built or called."""
        gateway = CompletionGateway(None, chat_model_factory=self.factory)

        with self.assertRaises(MissingCredentialError) as ctx:
            gateway.handle_turn(self.transcript, self.config)

        self.assertIn("API Key missing", str(ctx.exception))
        self.assertEqual(self.factory.kwargs, [])
        self.assertEqual(self.model.calls, [])

    def test_empty_credential_counts_as_missing(self):
        """Test that an empty key string is treated as no key."""
        gateway = CompletionGateway("", chat_model_factory=self.factory)
        with self.assertRaises(MissingCredentialError):
            gateway.handle_turn(self.transcript, self.config)
        self.assertFalse(gateway.credential_configured)

    def test_single_call_with_system_message_first(self):
        """Test that one call is made with the synthesized system message first."""
        reply = self.gateway.handle_turn(self.transcript, self.config)

        self.assertEqual(reply, self.model.reply)
        self.assertEqual(len(self.model.calls), 1)
        sent = self.model.calls[0]
        self.assertEqual(len(sent), 3)
        self.assertIsInstance(sent[0], SystemMessage)
        self.assertIn("Senior", sent[0].content)
        self.assertIn("System Design", sent[0].content)
        self.assertIsInstance(sent[1], AIMessage)
        self.assertIsInstance(sent[2], HumanMessage)
        self.assertEqual(sent[2].content, "I want to practice system design")

    def test_factory_receives_injected_credential(self):
        """Test that the injected key, model and timeout reach the model factory."""
        self.gateway.handle_turn(self.transcript, self.config)

        self.assertEqual(len(self.factory.kwargs), 1)
        kwargs = self.factory.kwargs[0]
        self.assertEqual(kwargs["api_key"], "test-key")
        self.assertEqual(kwargs["model"], "gemini-test")
        self.assertEqual(kwargs["timeout"], 12.0)

    def test_message_order_is_preserved(self):
        """Test that transcripts in different orders reach the model in those orders."""
        first = Message(role="user", content="first answer")
        second = Message(role="user", content="second answer")

        self.gateway.handle_turn([first, second], self.config)
        self.gateway.handle_turn([second, first], self.config)

        forward = [m.content for m in self.model.calls[0][1:]]
        backward = [m.content for m in self.model.calls[1][1:]]
        self.assertEqual(forward, ["first answer", "second answer"])
        self.assertEqual(backward, ["second answer", "first answer"])
        self.assertNotEqual(forward, backward)

    def test_reply_is_returned_unmodified(self):
        """Test that surrounding whitespace in the reply is kept."""
        self.model.reply = "  Good: clear.\nNext Question: why?\n"
        self.assertEqual(self.gateway.handle_turn(self.transcript, self.config), "  Good: clear.\nNext Question: why?\n")

    def test_text_parts_are_joined(self):
        """Test that a reply made of text parts is concatenated."""
        self.model.reply = [{"type": "text", "text": "Good: "}, "Next Question: scale it."]
        self.assertEqual(self.gateway.handle_turn(self.transcript, self.config), "Good: Next Question: scale it.")

    def test_non_text_reply_is_logged_provider_error(self):
        """Test that a non-text reply raises ProviderError and is logged."""
        self.model.reply = [{"type": "image_url", "image_url": "x"}]

        with self.assertLogs("interview_coach.gateway", level="ERROR") as logs:
            with self.assertRaises(ProviderError):
                self.gateway.handle_turn(self.transcript, self.config)

        self.assertTrue(any("Unusable chat model reply" in line for line in logs.output))

    def test_provider_failure_is_wrapped_and_not_retried(self):
        """Test that a model exception becomes ProviderError after exactly one call."""
        self.model.error = RuntimeError("quota exceeded")

        with self.assertRaises(ProviderError) as ctx:
            self.gateway.handle_turn(self.transcript, self.config)

        self.assertIn("quota exceeded", str(ctx.exception))
        self.assertEqual(len(self.model.calls), 1)


class TestBuildChatModel(unittest.TestCase):
    """Test cases for the default Gemini chat model factory."""

    def test_single_attempt_without_timeout(self):
        """Test that the model makes a single attempt and keeps the default timeout."""
        llm = build_chat_model(model="gemini-2.0-flash", api_key="test-key", temperature=0.3, top_p=0.9)

        self.assertEqual(llm.max_retries, 1)
        self.assertIsNone(llm.timeout)

    def test_timeout_is_passed_when_set(self):
        """Test that a configured timeout reaches the model."""
        llm = build_chat_model(
            model="gemini-2.0-flash", api_key="test-key", temperature=0.3, top_p=0.9, timeout=12.5
        )

        self.assertEqual(llm.max_retries, 1)
        self.assertEqual(llm.timeout, 12.5)


class TestToLcMessages(unittest.TestCase):
    """Test cases for to_lc_messages."""

    def test_maps_each_role(self):
        """Test that each role maps to its LangChain message class."""
        converted = to_lc_messages(
            [
                Message(role="system", content="s"),
                Message(role="user", content="u"),
                Message(role="assistant", content="a"),
            ]
        )
        self.assertEqual([type(m) for m in converted], [SystemMessage, HumanMessage, AIMessage])
        self.assertEqual([m.content for m in converted], ["s", "u", "a"])


if __name__ == "__main__":
    unittest.main()
