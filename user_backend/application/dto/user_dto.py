from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from ...domain.models.user import User


class UserResponse(BaseModel):
    """DTO for user response (no password)"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(serialization_alias="_id")
    name: str
    email: str
    age: int

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id or "", name=user.name, email=user.email, age=user.age)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class EmailCheckResponse(BaseModel):
    """DTO for the email availability check"""
    exists: bool


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SuccessEnvelope(BaseModel):
    """Uniform body of every 2xx response"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    status: str = "Success"
    message: str = "Success"
    data: Any = Field(default_factory=dict)
    meta: Dict[str, Any] = Field(default_factory=dict)
    timestamp: str = Field(default_factory=_utc_timestamp, serialization_alias="timeStamp")
