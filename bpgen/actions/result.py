"""Result payload shared by every action."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ActionResult(BaseModel):
    """Outcome of a CLI-facing action."""

    success: bool = Field(..., description="Whether the action completed")
    output: str = Field(default="", description="Human-readable log output")
