from __future__ import annotations

from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, Sequence, Union

from pydantic import BaseModel

from dms_console.models.document_type import SourcedField
from dms_console.models.index import Index
from dms_console.models.validation import FieldType

Schema = Union[Index, Sequence[SourcedField]]

INPUT_TYPES: Dict[FieldType, str] = {
    FieldType.TEXT: "text",
    FieldType.NUMBER: "number",
    FieldType.DATE: "date",
    FieldType.EMAIL: "email",
    FieldType.BOOLEAN: "checkbox",
    FieldType.SELECT: "select",
}


class FieldDescriptor(BaseModel):
    name: str
    field_type: FieldType
    is_required: bool
    placeholder: str
    input_type: str
    index_name: str
    index_id: str


def iter_schema_fields(schema: Schema) -> Iterator[SourcedField]:
    """Yield the schema's sub-fields in order, tagged with their source index."""
    if isinstance(schema, Index):
        for sub_field in schema.sub_fields:
            yield SourcedField(sub_field, schema.name, schema.id)
    else:
        yield from schema


def derive_form(schema: Schema, placeholder_template: str = "Enter {name}") -> List[FieldDescriptor]:
    # Fields sharing a name across indexes each get their own descriptor.
    descriptors = []
    for sub_field, index_name, index_id in iter_schema_fields(schema):
        placeholder = sub_field.description or placeholder_template.format(name=sub_field.name)
        descriptors.append(
            FieldDescriptor(
                name=sub_field.name,
                field_type=sub_field.field_type,
                is_required=sub_field.is_required,
                placeholder=placeholder,
                input_type=INPUT_TYPES[sub_field.field_type],
                index_name=index_name,
                index_id=index_id,
            )
        )
    return descriptors


def group_by_index(descriptors: Iterable[FieldDescriptor]) -> "OrderedDict[str, List[FieldDescriptor]]":
    groups: "OrderedDict[str, List[FieldDescriptor]]" = OrderedDict()
    for descriptor in descriptors:
        groups.setdefault(descriptor.index_name, []).append(descriptor)
    return groups
