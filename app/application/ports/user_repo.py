from typing import Protocol, Optional
from datetime import datetime

class UserDto:
    def __init__(self, id: str, email: str, nick_name: str, password_hash: str, role: str,
                 login_method: str, profile_image_path: Optional[str], created_at: datetime, updated_at: datetime):
        self.id = id
        self.email = email
        self.nick_name = nick_name
        self.password_hash = password_hash
        self.role = role
        self.login_method = login_method
        self.profile_image_path = profile_image_path
        self.created_at = created_at
        self.updated_at = updated_at

class UserRepository(Protocol):
    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        ...

    def get_by_email(self, email: str) -> Optional[UserDto]:
        ...

    def exists_by_email(self, email: str) -> bool:
        ...

    def exists_by_nick_name(self, nick_name: str) -> bool:
        ...

    def create(self, email: str, password_hash: str, nick_name: str, profile_image_path: Optional[str]) -> UserDto:
        ...

    def update_fields(self, user_id: str, nick_name: Optional[str], password_hash: Optional[str]) -> Optional[UserDto]:
        ...

    def find_profile_path(self, user_id: str) -> Optional[str]:
        ...

    def delete(self, user_id: str) -> bool:
        ...
