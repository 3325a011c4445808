from datetime import datetime, timezone
from typing import Dict, Optional
import uuid

import pytest

from app.application.ports.user_repo import UserDto


class FakeUserRepo:
    def __init__(self):
        self.users: Dict[str, UserDto] = {}
        self.profile_lookups = []

    def add(self, email: str, nick_name: str, password_hash: str = "hashed:pw", profile_image_path: Optional[str] = None, user_id: Optional[str] = None) -> UserDto:
        now = datetime.now(timezone.utc)
        user = UserDto(
            id=user_id or str(uuid.uuid4()),
            email=email,
            nick_name=nick_name,
            password_hash=password_hash,
            role="COMMON",
            login_method="COMMON",
            profile_image_path=profile_image_path,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        return user

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def exists_by_email(self, email):
        return self.get_by_email(email) is not None

    def exists_by_nick_name(self, nick_name):
        return any(u.nick_name == nick_name for u in self.users.values())

    def create(self, email, password_hash, nick_name, profile_image_path):
        return self.add(email, nick_name, password_hash, profile_image_path)

    def update_fields(self, user_id, nick_name, password_hash):
        user = self.users.get(user_id)
        if not user:
            return None
        if nick_name is not None:
            user.nick_name = nick_name
        if password_hash is not None:
            user.password_hash = password_hash
        user.updated_at = datetime.now(timezone.utc)
        return user

    def find_profile_path(self, user_id):
        self.profile_lookups.append(user_id)
        user = self.users.get(user_id)
        return user.profile_image_path if user else None

    def delete(self, user_id):
        return self.users.pop(user_id, None) is not None


class FakeStorage:
    def __init__(self):
        self.files: Dict[str, bytes] = {}
        self.exists_calls = []
        self.read_calls = []
        self.read_error: Optional[OSError] = None

    def save_bytes(self, subdir, filename, data):
        path = f"{subdir}/{filename}"
        self.files[path] = data
        return path

    def exists(self, path):
        self.exists_calls.append(path)
        return path in self.files

    def read_all(self, path):
        self.read_calls.append(path)
        if self.read_error is not None:
            raise self.read_error
        return self.files[path]

    def delete(self, path):
        return self.files.pop(path, None) is not None


def fake_hash(plain: str) -> str:
    return f"hashed:{plain}"


def fake_verify(plain: str, hashed: str) -> bool:
    return hashed == fake_hash(plain)


@pytest.fixture
def user_repo():
    return FakeUserRepo()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def password_hasher():
    return fake_hash, fake_verify
