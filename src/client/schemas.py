"""API schemas for client and transaction requests and responses."""
import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.app.core.domain.models import PHONE_PATTERN


class CreateClientRequest(BaseModel):
    """Request schema for creating a new client."""
    name: str = Field(..., min_length=1, description="Name cannot be blank")
    email: EmailStr = Field(..., description="Email address is required")
    phone: str = Field(..., pattern=PHONE_PATTERN, description="Phone in (DD) DDDDD-DDDD or (DD) DDDD-DDDD format")

    @field_validator("name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure the name is not just whitespace."""
        if not v or not v.strip():
            raise ValueError("Field cannot be blank or only whitespace")
        return v.strip()


class UpdateClientRequest(CreateClientRequest):
    """Request schema for replacing a client's name, email and phone."""


class ClientResponse(BaseModel):
    """Response schema for client data returned by the API."""
    id: int
    name: str
    email: EmailStr = Field(..., description="Email address")
    phone: str

    model_config = {"from_attributes": True}


class CreateTransactionRequest(BaseModel):
    """Request schema for creating a new transaction. A missing date means today."""
    amount: float = Field(..., gt=0, description="Amount must be strictly positive")
    date: datetime.date | None = Field(default=None, description="Defaults to the current date when omitted")
    client_id: int = Field(..., description="ID of the client who owns this transaction")


class UpdateTransactionRequest(BaseModel):
    """Request schema for updating a transaction. A missing date keeps the stored one."""
    amount: float = Field(..., gt=0, description="Amount must be strictly positive")
    date: datetime.date | None = Field(default=None, description="Left unchanged when omitted")
    client_id: int = Field(..., description="ID of the client who owns this transaction")


class TransactionResponse(BaseModel):
    """Response schema for transaction data returned by the API."""
    id: int
    amount: float
    date: datetime.date
    client_id: int

    model_config = {"from_attributes": True}


class CountResponse(BaseModel):
    """Response schema for count endpoints."""
    count: int = Field(..., ge=0)


class ClientTotalResponse(BaseModel):
    """Sum of a client's transaction amounts. Zero when the client has none."""
    client_id: int
    total: float
