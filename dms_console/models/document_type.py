from __future__ import annotations

from datetime import date
from typing import List, NamedTuple

from pydantic import BaseModel, Field, field_validator

from .subfield import SubField


class DocumentType(BaseModel):
    id: str
    name: str
    description: str = ""
    index_ids: List[str] = Field(default_factory=list)  # weak references into the index catalog
    created_at: date = Field(default_factory=date.today)

    @field_validator("index_ids")
    @classmethod
    def _dedupe_index_ids(cls, value: List[str]) -> List[str]:
        # membership is a set, but iteration keeps first-seen order
        return list(dict.fromkeys(value))


class SourcedField(NamedTuple):
    sub_field: SubField
    index_name: str
    index_id: str
