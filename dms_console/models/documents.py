from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field


class UploadedDocument(BaseModel):
    id: str
    name: str  # file name as picked by the user
    document_type_id: str
    data: Dict[str, Any] = Field(default_factory=dict)
    uploaded_at: datetime = Field(default_factory=datetime.now)
