from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .validation import FieldType, RuleKind, ValidationRule, add_rule, remove_rule, validate_rules


class SubField(BaseModel):
    id: str
    name: str
    field_type: FieldType = FieldType.TEXT
    description: str = ""
    is_required: bool = False
    validations: List[ValidationRule] = Field(default_factory=list)
    is_existing: bool = False  # True when reused from the library
    usage_count: Optional[int] = Field(default=None, ge=0)  # library records only

    @model_validator(mode="after")
    def check_rules(self) -> "SubField":
        validate_rules(self.field_type, self.validations)
        return self

    def add_rule(self, rule: ValidationRule) -> None:
        self.validations = add_rule(self.field_type, self.validations, rule)

    def remove_rule(self, position: int, kind: Optional[RuleKind] = None) -> None:
        self.validations = remove_rule(self.validations, position, kind)

    def rule(self, kind: RuleKind) -> Optional[ValidationRule]:
        for r in self.validations:
            if r.kind == RuleKind(kind):
                return r
        return None

    def copy_for_index(self) -> "SubField":
        """Deep copy used when a library field is placed into an index."""
        return self.model_copy(deep=True, update={"is_existing": True})
