"""Starter catalog shown on a fresh console."""
from __future__ import annotations

from datetime import date
from typing import List

from dms_console.models.document_type import DocumentType
from dms_console.models.index import Index
from dms_console.models.subfield import SubField
from dms_console.models.validation import FieldType, RuleKind, ValidationRule


def sample_sub_fields() -> List[SubField]:
    return [
        SubField(
            id="sf1",
            name="Invoice Number",
            field_type=FieldType.TEXT,
            description="Standard invoice identification number",
            is_required=True,
            validations=[
                ValidationRule(kind=RuleKind.REQUIRED, message="Invoice number is required"),
                ValidationRule(kind=RuleKind.MIN_LENGTH, value="5",
                               message="Invoice number must be at least 5 characters"),
            ],
            is_existing=True,
            usage_count=12,
        ),
        SubField(
            id="sf2",
            name="Invoice Date",
            field_type=FieldType.DATE,
            description="Date when invoice was issued",
            is_required=True,
            validations=[ValidationRule(kind=RuleKind.REQUIRED, message="Invoice date is required")],
            is_existing=True,
            usage_count=15,
        ),
        SubField(
            id="sf3",
            name="Customer Name",
            field_type=FieldType.TEXT,
            description="Name of the customer or client",
            is_required=True,
            validations=[
                ValidationRule(kind=RuleKind.REQUIRED, message="Customer name is required"),
                ValidationRule(kind=RuleKind.MAX_LENGTH, value="100",
                               message="Customer name cannot exceed 100 characters"),
            ],
            is_existing=True,
            usage_count=8,
        ),
        SubField(
            id="sf4",
            name="Amount",
            field_type=FieldType.NUMBER,
            description="Total amount of the invoice",
            is_required=True,
            validations=[
                ValidationRule(kind=RuleKind.REQUIRED, message="Amount is required"),
                ValidationRule(kind=RuleKind.MIN, value="0", message="Amount must be positive"),
            ],
            is_existing=True,
            usage_count=10,
        ),
    ]


def sample_indexes() -> List[Index]:
    invoice_fields = [sf.copy_for_index() for sf in sample_sub_fields()]
    contract_fields = [
        SubField(id="new_c1", name="Contract Number", field_type=FieldType.TEXT, is_required=True,
                 validations=[ValidationRule(kind=RuleKind.PATTERN, value=r"^[A-Z]{2,4}-\d+$",
                                             message="Use a reference like CTR-1024")]),
        SubField(id="new_c2", name="Counterparty", field_type=FieldType.TEXT, is_required=True,
                 description="Legal name of the other party"),
        SubField(id="new_c3", name="Effective Date", field_type=FieldType.DATE, is_required=True),
        SubField(id="new_c4", name="Contact Email", field_type=FieldType.EMAIL,
                 validations=[ValidationRule(kind=RuleKind.EMAIL)]),
        SubField(id="new_c5", name="Signed", field_type=FieldType.BOOLEAN),
    ]
    return [
        Index(id="1", name="Invoice Index", description="Standard invoice indexing fields",
              sub_fields=invoice_fields, is_active=True, created_at=date(2024, 1, 15)),
        Index(id="2", name="Contract Index", description="Legal contract document fields",
              sub_fields=contract_fields, is_active=True, created_at=date(2024, 1, 10)),
    ]


def sample_document_types() -> List[DocumentType]:
    return [
        DocumentType(id="dt_1", name="Legal Documents",
                     description="Contracts, agreements, and legal paperwork",
                     index_ids=["2"], created_at=date(2024, 1, 15)),
        DocumentType(id="dt_2", name="Financial Records",
                     description="Invoices, receipts, and financial statements",
                     index_ids=["1"], created_at=date(2024, 1, 12)),
        DocumentType(id="dt_3", name="Mixed Business Documents",
                     description="Documents requiring both legal and financial indexing",
                     index_ids=["1", "2"], created_at=date(2024, 1, 10)),
    ]
