"""
Shared response envelopes and field types.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, Field

from jobfair_hub.core.database.base import as_naive_utc

#: Datetime input stored the way every table stores time: naive UTC.
UTCDateTime = Annotated[datetime, AfterValidator(as_naive_utc)]


class ActionResult(BaseModel):
    """Outcome of a mutating operation."""

    success: bool = Field(description="Whether the operation succeeded")
    message: str = Field(default="", description="Human-readable outcome")
    data: Optional[Any] = Field(default=None, description="Operation payload, if any")

    @classmethod
    def ok(cls, message: str, data: Any = None) -> "ActionResult":
        return cls(success=True, message=message, data=data)
