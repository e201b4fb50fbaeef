import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import deferred, validates
from passlib.context import CryptContext

from ..core.config import settings
from ..core.database import Base
from ..core.exceptions import ValidationError
from ..utils.enums import UserRole

bcrypt_context = CryptContext(
    schemes=['bcrypt'], deprecated='auto', bcrypt__rounds=settings.BCRYPT_ROUNDS)


def utcnow():
    return datetime.now(timezone.utc)


def hash_password(password: str) -> str:
    return bcrypt_context.hash(password)


class Users(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(50), nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    # never selected unless explicitly undeferred
    password = deferred(Column(String(255), nullable=False))
    role = Column(String(16), nullable=False, default=UserRole.USER.value)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    @validates("name")
    def validate_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValidationError("Please provide a name")
        if len(value) > 50:
            raise ValidationError("Name cannot be more than 50 characters")
        return value

    @validates("email")
    def validate_email(self, key, value):
        value = (value or "").strip().lower()
        if not value or "@" not in value:
            raise ValidationError("Please provide a valid email")
        return value

    @validates("role")
    def validate_role(self, key, value):
        if value not in UserRole.values():
            raise ValidationError(f"{value} is not a valid role")
        return UserRole(value).value

    def verify_password(self, password: str) -> bool:
        return bcrypt_context.verify(password, self.password)
