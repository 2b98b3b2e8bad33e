"""Pydantic models for frames exchanged over the visitor websocket."""

from typing import Any, Dict

from pydantic import BaseModel, Field


class InboundEnvelope(BaseModel):
    """A client frame: a type discriminator and its payload."""

    type: str
    data: Dict[str, Any] = Field(default_factory=dict)


class OutboundEnvelope(BaseModel):
    """A server event sent to one or more visitor sessions."""

    type: str
    data: Dict[str, Any] = Field(default_factory=dict)
