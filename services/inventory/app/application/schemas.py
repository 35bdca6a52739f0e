import uuid
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

class InventoryFields(BaseModel):
    name: str = Field(..., max_length=200)
    quantity: int = Field(..., ge=0)
    category: str = Field(..., max_length=100)
    supplier: str = Field(..., max_length=200)
    expiry_date: Optional[datetime] = None
    description: Optional[str] = None
    photo_url: Optional[str] = Field(None, max_length=500)

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("name", "category", "supplier")
    @classmethod
    def not_blank(cls, value: str) -> str:
        # Stored as provided; only blank values are rejected
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value

class InventoryCreate(InventoryFields):
    pass

class InventoryUpdate(InventoryFields):
    pass

class InventoryRead(BaseModel):
    id: uuid.UUID
    name: str
    quantity: int
    category: str
    supplier: str
    expiry_date: Optional[datetime] = None
    description: Optional[str] = None
    photo_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class DuplicateResponse(BaseModel):
    duplicate: bool = True
    message: str

class PhotoUploadResponse(BaseModel):
    url: str

class ValidationProblem(BaseModel):
    title: str = "One or more validation errors occurred."
    errors: dict[str, list[str]]
