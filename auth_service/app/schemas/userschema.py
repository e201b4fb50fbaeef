from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class UserCreate(EmptyStringModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)


# For reading a user (response model); the password hash is never part of it
class UserRead(BaseModel):
    id: str
    name: str
    email: EmailStr
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}  # allows Pydantic to work with SQLAlchemy objects
