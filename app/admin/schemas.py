from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AdminOut(BaseModel):
    """Administrative record: its identifier plus its open-ended field mapping."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(description="Document identifier.", examples=["DJkNTXeJfbFYTV8GMKHx"])


class AdminNotFoundOut(BaseModel):
    error: str = Field(examples=["Admin not found"])
