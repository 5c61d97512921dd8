"""Domain models used in business logic."""
import datetime

from pydantic import BaseModel, EmailStr, Field


# (DD) DDDDD-DDDD for mobile numbers, (DD) DDDD-DDDD for landlines
PHONE_PATTERN = r"^\(\d{2}\) \d{4,5}-\d{4}$"


class Client(BaseModel):
    """Domain model for Client used in business logic."""
    id: int | None = Field(default=None, description="Store-assigned ID, None until persisted")
    name: str = Field(..., min_length=1, description="Name cannot be blank")
    email: EmailStr = Field(..., description="Email address is required")
    phone: str = Field(..., pattern=PHONE_PATTERN, description="Phone in (DD) DDDDD-DDDD format")

    model_config = {"from_attributes": True}


class Transaction(BaseModel):
    """Domain model for a dated monetary record owned by a client."""
    id: int | None = Field(default=None, description="Store-assigned ID, None until persisted")
    amount: float = Field(..., gt=0, description="Amount must be strictly positive")
    date: datetime.date = Field(..., description="Date the transaction happened")
    client_id: int = Field(..., description="ID of the client who owns this transaction")

    model_config = {"from_attributes": True}
