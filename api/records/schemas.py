"""
Pydantic schemas for the `data` table endpoints.

Binding follows plain JSON typing: a missing field takes its zero value,
a field of the wrong JSON type is rejected (no "5" -> 5 coercion).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DataRecord(BaseModel):
    model_config = ConfigDict(strict=True)

    date: int = 0
    day: str = ""
    tasks: str = ""


class DataUpdate(BaseModel):
    # `date` may be sent but is never applied; the key comes from the path.
    model_config = ConfigDict(strict=True, extra="ignore")

    day: str = ""
    tasks: str = ""


class MessageResponse(BaseModel):
    message: str
