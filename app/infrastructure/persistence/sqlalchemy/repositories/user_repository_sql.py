from typing import Optional
from sqlmodel import Session, select

from .....db.models import User, utcnow
from .....application.ports.user_repo import UserRepository, UserDto

class SqlUserRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, user: User) -> UserDto:
        return UserDto(
            id=user.id,
            email=user.email,
            nick_name=user.nick_name,
            password_hash=user.password,
            role=user.role,
            login_method=user.login_method,
            profile_image_path=user.profile_image_path,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _get(self, user_id: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.id == user_id)).first()

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        user = self._get(user_id)
        return self._to_dto(user) if user else None

    def get_by_email(self, email: str) -> Optional[UserDto]:
        user = self.session.exec(select(User).where(User.email == email)).first()
        return self._to_dto(user) if user else None

    def exists_by_email(self, email: str) -> bool:
        return self.session.exec(select(User.id).where(User.email == email)).first() is not None

    def exists_by_nick_name(self, nick_name: str) -> bool:
        return self.session.exec(select(User.id).where(User.nick_name == nick_name)).first() is not None

    def create(self, email: str, password_hash: str, nick_name: str, profile_image_path: Optional[str]) -> UserDto:
        user = User(email=email, password=password_hash, nick_name=nick_name, profile_image_path=profile_image_path)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return self._to_dto(user)

    def update_fields(self, user_id: str, nick_name: Optional[str], password_hash: Optional[str]) -> Optional[UserDto]:
        user = self._get(user_id)
        if not user:
            return None
        if nick_name is not None:
            user.nick_name = nick_name
        if password_hash is not None:
            user.password = password_hash
        user.updated_at = utcnow()
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return self._to_dto(user)

    def find_profile_path(self, user_id: str) -> Optional[str]:
        return self.session.exec(select(User.profile_image_path).where(User.id == user_id)).first()

    def delete(self, user_id: str) -> bool:
        user = self._get(user_id)
        if not user:
            return False
        self.session.delete(user)
        self.session.commit()
        return True
