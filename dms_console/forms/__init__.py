from .deriver import FieldDescriptor, derive_form, group_by_index
from .evaluator import EvaluationResult, RequiredFieldMissing, RuleViolation, evaluate

__all__ = [
    "FieldDescriptor",
    "derive_form",
    "group_by_index",
    "EvaluationResult",
    "RequiredFieldMissing",
    "RuleViolation",
    "evaluate",
]
