from typing import Optional

from sqlalchemy.orm import Session, undefer

from shared.core.record_store import RecordStore
from shared.models.users import Users, hash_password
from shared.utils.enums import UserRole


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository:
    """Credential store. Reads never load the password hash unless asked."""

    def __init__(self, db: Session):
        self.store: RecordStore[Users] = RecordStore(db, Users)

    def find_by_id(self, user_id: str) -> Optional[Users]:
        return self.store.find_by_id(user_id)

    def find_by_email(self, email: str) -> Optional[Users]:
        return self.store.find_one([Users.email == normalize_email(email)])

    def find_by_email_with_password(self, email: str) -> Optional[Users]:
        return (
            self.store.db.query(Users)
            .options(undefer(Users.password))
            .filter(Users.email == normalize_email(email))
            .first()
        )

    def email_exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def create_user(self, name: str, email: str, password: str,
                    role: str = UserRole.USER.value) -> Users:
        # only the hash is ever handed to the store
        return self.store.create({
            "name": name,
            "email": normalize_email(email),
            "password": hash_password(password),
            "role": role,
        })
