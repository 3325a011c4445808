import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..identity import UserIdentity
from ..ports.storage_repo import StorageRepository
from ..ports.user_repo import UserRepository, UserDto
from ...exceptions import DuplicatedNickNameException, UserNotFoundException

logger = logging.getLogger(__name__)


@dataclass
class ProfileService:
    user_repo: UserRepository
    storage_repo: StorageRepository
    hash_password: Callable[[str], str]

    def get_profile(self, identity: UserIdentity) -> UserDto:
        user = self.user_repo.get_by_id(identity.user_id)
        if not user:
            raise UserNotFoundException()
        return user

    def update_info(self, identity: UserIdentity, nick_name: Optional[str], password: Optional[str]) -> UserDto:
        user = self.get_profile(identity)
        if nick_name is not None:
            nick_name = nick_name.strip()
            if nick_name != user.nick_name and self.user_repo.exists_by_nick_name(nick_name):
                raise DuplicatedNickNameException()
        password_hash = self.hash_password(password) if password else None
        updated = self.user_repo.update_fields(user.id, nick_name or None, password_hash)
        if not updated:
            raise UserNotFoundException()
        return updated

    def delete_user(self, identity: UserIdentity) -> None:
        user = self.get_profile(identity)
        if user.profile_image_path:
            # Best effort; a stale file must not block account removal
            try:
                self.storage_repo.delete(user.profile_image_path)
            except OSError as e:
                logger.warning(f"Failed to delete profile image for user {user.id}: {e}")
        if not self.user_repo.delete(user.id):
            raise UserNotFoundException()
        logger.info(f"Deleted user {user.id}")
