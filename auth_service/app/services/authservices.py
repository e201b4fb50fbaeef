import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from shared.models.users import Users
from ..schemas.userschema import UserRead
from .userservices import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:

    def __init__(self, db: Session, repository: UserRepository = None):
        self.repository = repository or UserRepository(db)

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        if self.repository.email_exists(email):
            logger.info("Registration rejected, email already in use")
            raise ConflictError("Email already registered")

        user = self.repository.create_user(name, email, password)
        logger.info("User %s registered", user.id)

        return self._session_for(user)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        user = self.repository.find_by_email_with_password(email)

        # same error for unknown email and wrong password
        if not user or not user.verify_password(password):
            logger.warning("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("User %s logged in", user.id)
        return self._session_for(user)

    def get_user_by_id(self, user_id: str) -> UserRead:
        user = self.repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)

    def generate_token(self, user_id: str) -> str:
        return auth.create_access_token({"id": str(user_id)})

    def verify_token(self, token: str) -> Dict[str, Any]:
        return auth.decode_access_token(token)

    def _session_for(self, user: Users) -> Dict[str, Any]:
        return {
            "user": UserRead.model_validate(user),
            "token": self.generate_token(user.id),
        }
