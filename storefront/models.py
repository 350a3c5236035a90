# storefront/models.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional

PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1513519245088-0e12902e5a38?auto=format&fit=crop&q=80&w=500"

INQUIRY_STATUS_NEW = "New"

class Product(BaseModel):
    id: str
    name: str
    category: str
    price: float = 0
    description: Optional[str] = ""
    image: Optional[str] = PLACEHOLDER_IMAGE
    created_at: Optional[str] = None

    @field_validator("image")
    @classmethod
    def _placeholder_when_missing(cls, v):
        return v or PLACEHOLDER_IMAGE

class ProductIn(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    description: str = ""
    image: str = PLACEHOLDER_IMAGE

def image_path(filename: Optional[str]) -> str:
    # a typed filename is served from the site root; nothing typed means the placeholder
    filename = (filename or "").strip()
    return f"/{filename}" if filename else PLACEHOLDER_IMAGE

class Inquiry(BaseModel):
    id: str
    product: str
    customer: str
    contact: str
    message: Optional[str] = ""
    status: Optional[str] = INQUIRY_STATUS_NEW
    created_at: Optional[str] = None

class InquiryIn(BaseModel):
    product: str
    customer: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1)
    message: str = ""

class ActionResult(BaseModel):
    ok: bool
    message: str = ""
    cancelled: bool = False
