import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...media_utils import MediaType, media_type_for_path
from ..identity import UserIdentity
from ..ports.storage_repo import StorageRepository
from ..ports.user_repo import UserRepository

logger = logging.getLogger(__name__)


class AssetErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    UNSUPPORTED_TYPE = "unsupported_type"
    READ_FAILURE = "read_failure"


@dataclass(frozen=True)
class AssetResult:
    data: Optional[bytes] = None
    media_type: Optional[MediaType] = None
    error: Optional[AssetErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: bytes, media_type: MediaType) -> "AssetResult":
        return cls(data=data, media_type=media_type)

    @classmethod
    def failure(cls, error: AssetErrorKind) -> "AssetResult":
        return cls(error=error)


@dataclass
class ProfileAssetResolver:
    """Loads the profile image recorded for a user.

    The identity must already be authenticated by the caller. Every outcome is
    returned as an AssetResult; NOT_FOUND covers both a user with no recorded
    image and a recorded path that is missing from storage.
    """
    user_repo: UserRepository
    storage_repo: StorageRepository

    def resolve(self, identity: UserIdentity) -> AssetResult:
        path = self.user_repo.find_profile_path(identity.user_id)
        if not path:
            logger.info(f"No profile image recorded for user {identity.user_id}")
            return AssetResult.failure(AssetErrorKind.NOT_FOUND)

        if not self.storage_repo.exists(path):
            logger.warning(f"Profile image for user {identity.user_id} is missing from storage: {path}")
            return AssetResult.failure(AssetErrorKind.NOT_FOUND)

        media_type = media_type_for_path(path)
        if not media_type.is_image:
            logger.warning(f"Profile image for user {identity.user_id} has unsupported extension: {path}")
            return AssetResult.failure(AssetErrorKind.UNSUPPORTED_TYPE)

        try:
            data = self.storage_repo.read_all(path)
        except OSError as e:
            logger.error(f"Failed to read profile image for user {identity.user_id} at {path}: {e}")
            return AssetResult.failure(AssetErrorKind.READ_FAILURE)

        return AssetResult.success(data, media_type)
