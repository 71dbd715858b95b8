# File: landpro/schemas/portal.py

from typing import List, Optional

from pydantic import BaseModel

from landpro.schemas.client import ClientRead
from landpro.schemas.invoice import InvoiceRead
from landpro.schemas.quote import QuoteRead


class PortalView(BaseModel):
    client: ClientRead
    landscaper_name: Optional[str] = None
    quotes: List[QuoteRead]
    invoices: List[InvoiceRead]
