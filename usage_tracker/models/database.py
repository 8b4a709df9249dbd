from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, Dict, Mapping, Optional
from datetime import date, datetime

from ..utils.helpers import ensure_timezone_aware

# ObjectIds travel as strings in API payloads
PyObjectId = Annotated[str, BeforeValidator(str)]

class DocumentModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

class User(DocumentModel):
    id: PyObjectId
    username: str
    email: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "User":
        return cls(
            id=doc["_id"],
            username=doc["username"],
            email=doc["email"],
            created_at=ensure_timezone_aware(doc.get("created_at")),
        )

class UsageLog(DocumentModel):
    id: PyObjectId
    user_id: PyObjectId
    app_name: str
    minutes_spent: float
    usage_date: date = Field(alias="date")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "UsageLog":
        return cls(
            id=doc["_id"],
            user_id=doc["user_id"],
            app_name=doc["app_name"],
            minutes_spent=doc["minutes_spent"],
            usage_date=doc["date"],
            created_at=ensure_timezone_aware(doc.get("created_at")),
            updated_at=ensure_timezone_aware(doc.get("updated_at")),
        )
