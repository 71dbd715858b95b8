# File: landpro/schemas/invoice.py

from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

InvoiceStatus = Literal["draft", "sent", "paid", "overdue"]


class InvoiceCreate(BaseModel):
    """
    Either ``quote_id`` (an approved quote; client and amount are taken from
    it) or ``client_id`` + ``amount``.
    """

    quote_id: Optional[str] = None
    client_id: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, gt=0)
    due_date: Optional[date] = None

    @model_validator(mode="after")
    def check_source(self):
        if self.quote_id is None and (self.client_id is None or self.amount is None):
            raise ValueError("Provide quote_id, or client_id and amount.")
        return self


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatus
    version: int


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    client_id: str
    quote_id: Optional[str] = None
    invoice_number: str
    amount: Decimal
    issue_date: date
    due_date: Optional[date] = None
    status: str
    stripe_payment_link: Optional[str] = None
    stripe_payment_intent_id: Optional[str] = None
    paid_at: Optional[datetime] = None
    version: int
    created_at: datetime
    updated_at: datetime


# ---------- payment functions ----------

class PaymentLinkRequest(BaseModel):
    invoiceId: str = Field(min_length=1)


class PaymentLinkResponse(BaseModel):
    success: bool = True
    paymentLink: str


class WebhookAck(BaseModel):
    received: bool = True
    duplicate: Optional[bool] = None
