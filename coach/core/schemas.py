from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="'system', 'user' or 'assistant'")
    content: str


class SessionConfig(BaseModel):
    """Focus area and level chosen on the dashboard, fixed for a session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    focus_area: str = Field("General", alias="type", description="Interview type, e.g. 'Technical'")
    level: str = Field("Mid-Level", description="Target role level, e.g. 'Senior'")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class ChatRequest(BaseModel):
    messages: List[Message] = Field(..., description="Full transcript, oldest first")
    config: SessionConfig = Field(default_factory=SessionConfig)

    @field_validator("config", mode="before")
    @classmethod
    def _null_config_means_default(cls, value):
        return SessionConfig() if value is None else value


class ChatReply(BaseModel):
    reply: str


class ChatError(BaseModel):
    error: str
