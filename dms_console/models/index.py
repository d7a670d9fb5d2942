from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, Field

from .subfield import SubField


class Index(BaseModel):
    id: str
    name: str
    description: str = ""
    sub_fields: List[SubField] = Field(default_factory=list)
    is_active: bool = True
    created_at: date = Field(default_factory=date.today)

    @property
    def field_count(self) -> int:
        return len(self.sub_fields)
