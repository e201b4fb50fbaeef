from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def values(cls):
        return [role.value for role in cls]
