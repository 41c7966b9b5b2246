from __future__ import annotations

from typing import Dict, NamedTuple

from coach.core.schemas import SessionConfig


SYSTEM_PROMPT_TEMPLATE = """You are an experienced interviewer running a {level} {focus_area} interview.

RULES:
1. Ask realistic questions for a {level} candidate in the {focus_area} area.
2. Start directly with your first question. Do NOT open with a generic greeting.
3. AFTER every answer, give brief, constructive feedback:
   - "Good: [what they did well]"
   - "Improvement: [what was weak]"
4. Then immediately ask the next question:
   - "Next Question: [move the interview forward]"

TONE:
- Professional, adaptive, and direct.
- Do NOT be overly technical unless the interview is a technical one.
- Keep each reply short enough to read in under a minute."""


SEED_GREETING_TEMPLATE = (
    "Hello. I'll be running your {level} {focus_area} interview today. "
    "Whenever you're ready, tell me a little about your background and we'll begin."
)


class AuxiliaryAction(NamedTuple):
    instruction: str
    display: str


AUXILIARY_ACTIONS: Dict[str, AuxiliaryAction] = {
    "hint": AuxiliaryAction(
        instruction=(
            "I'm stuck on the current question. Give me a short hint that points me "
            "in the right direction without giving away the full answer."
        ),
        display="Can I get a hint?",
    ),
    "skip": AuxiliaryAction(
        instruction=(
            "I'd like to skip this question. Don't give feedback on it, "
            "just move on and ask me the next question."
        ),
        display="Skip this question.",
    ),
    "analyze": AuxiliaryAction(
        instruction=(
            "Pause the interview and analyze my answers so far. Give me an overall "
            "score from 1 to 10, list what I did well, and list concrete improvements "
            "for my next attempt."
        ),
        display="Analyze my performance so far.",
    ),
}


def build_system_prompt(config: SessionConfig) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(level=config.level, focus_area=config.focus_area)


def seed_greeting(config: SessionConfig) -> str:
    return SEED_GREETING_TEMPLATE.format(level=config.level, focus_area=config.focus_area)
