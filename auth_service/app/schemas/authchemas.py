from pydantic import BaseModel, EmailStr, Field
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..schemas.userschema import UserRead


class LoginRequest(EmptyStringModel):
    email: EmailStr
    password: str = Field(min_length=1)


class AuthenticationResponse(BaseModel):
    user: UserRead
    token: str
    token_type: str = "bearer"
