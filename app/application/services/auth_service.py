import logging
from typing import Callable, Dict, Any, Optional
from dataclasses import dataclass

from ..ports.user_repo import UserRepository, UserDto
from ..ports.oauth_provider import OAuthProvider
from ...exceptions import (
    DuplicatedEmailException,
    DuplicatedNickNameException,
    InvalidCredentialsException,
    NoRegisteredArgumentsException,
    OAuthProviderError,
)

logger = logging.getLogger(__name__)


def _blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


@dataclass
class LoginResult:
    user: UserDto
    token: str


@dataclass
class AuthService:
    user_repo: UserRepository
    hash_password: Callable[[str], str]
    verify_password: Callable[[str, str], bool]
    issue_token: Callable[[Dict[str, Any]], str]
    oauth_provider: Optional[OAuthProvider] = None

    def register(self, email: Optional[str], password: Optional[str], nick_name: Optional[str], profile_image_path: Optional[str] = None) -> UserDto:
        if _blank(email) or _blank(password) or _blank(nick_name):
            raise NoRegisteredArgumentsException()
        email = email.strip()
        nick_name = nick_name.strip()
        if self.user_repo.exists_by_email(email):
            raise DuplicatedEmailException()
        if self.user_repo.exists_by_nick_name(nick_name):
            raise DuplicatedNickNameException()
        user = self.user_repo.create(email, self.hash_password(password), nick_name, profile_image_path)
        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> LoginResult:
        user = self.user_repo.get_by_email(email.strip())
        if not user:
            raise InvalidCredentialsException("Email is not registered.")
        if not self.verify_password(password, user.password_hash):
            raise InvalidCredentialsException("Password does not match.")
        return LoginResult(user=user, token=self.token_for(user))

    def token_for(self, user: UserDto) -> str:
        return self.issue_token({"sub": user.id, "email": user.email, "role": user.role})

    def is_duplicate_email(self, email: str) -> bool:
        return self.user_repo.exists_by_email(email.strip())

    def is_duplicate_nick(self, nick_name: str) -> bool:
        return self.user_repo.exists_by_nick_name(nick_name.strip())

    def handle_oauth_code(self, code: str) -> str:
        """Hand an authorization code to the configured provider; returns the provider access token."""
        if self.oauth_provider is None:
            raise OAuthProviderError("OAuth provider is not configured.")
        logger.info(f"Received {self.oauth_provider.name} authorization code")
        return self.oauth_provider.exchange_code(code)
