"""Shared response envelopes."""

from __future__ import annotations

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement for mutations that return no resource."""

    message: str
