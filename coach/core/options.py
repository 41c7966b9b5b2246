"""Choices offered on the session dashboard."""

from __future__ import annotations

from typing import Dict, List


INTERVIEW_TYPES: Dict[str, str] = {
    "Technical": "Algorithms, data structures, and coding challenges.",
    "Behavioral": "STAR method, culture fit, and soft skills.",
    "System Design": "Scalability, architecture, and trade-offs.",
}

DIFFICULTIES: List[str] = ["Junior", "Mid-Level", "Senior", "Lead"]


def describe_options() -> str:
    lines = ["Interview types:"]
    for name, desc in INTERVIEW_TYPES.items():
        lines.append(f"  {name:<14} {desc}")
    lines.append("Levels: " + ", ".join(DIFFICULTIES))
    return "\n".join(lines)
