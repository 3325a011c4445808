import pytest

from app.application.identity import UserIdentity
from app.application.services.profile_service import ProfileService
from app.exceptions import DuplicatedNickNameException, UserNotFoundException


@pytest.fixture
def svc(user_repo, storage, password_hasher):
    return ProfileService(user_repo=user_repo, storage_repo=storage, hash_password=password_hasher[0])


def test_get_profile(svc, user_repo):
    user = user_repo.add("me@b.com", "me")
    assert svc.get_profile(UserIdentity(user.id, user.email)).nick_name == "me"


def test_get_profile_unknown_user(svc):
    with pytest.raises(UserNotFoundException):
        svc.get_profile(UserIdentity("ghost", "g@b.com"))


def test_update_nick_and_password(svc, user_repo):
    user = user_repo.add("me@b.com", "me")
    updated = svc.update_info(UserIdentity(user.id, user.email), "renamed", "newpw")
    assert updated.nick_name == "renamed"
    assert updated.password_hash == "hashed:newpw"


def test_update_keeps_own_nick(svc, user_repo):
    user = user_repo.add("me@b.com", "me", password_hash="hashed:old")
    updated = svc.update_info(UserIdentity(user.id, user.email), "me", None)
    assert updated.nick_name == "me"
    assert updated.password_hash == "hashed:old"


def test_update_rejects_nick_taken_by_other(svc, user_repo):
    user_repo.add("other@b.com", "taken")
    user = user_repo.add("me@b.com", "me")
    with pytest.raises(DuplicatedNickNameException):
        svc.update_info(UserIdentity(user.id, user.email), "taken", None)


def test_delete_removes_user_and_image(svc, user_repo, storage):
    storage.files["profiles/me.png"] = b"png"
    user = user_repo.add("me@b.com", "me", profile_image_path="profiles/me.png")
    svc.delete_user(UserIdentity(user.id, user.email))
    assert user_repo.get_by_id(user.id) is None
    assert "profiles/me.png" not in storage.files


def test_delete_survives_image_removal_failure(svc, user_repo, storage):
    def broken_delete(path):
        raise PermissionError("read-only")

    storage.delete = broken_delete
    user = user_repo.add("me@b.com", "me", profile_image_path="profiles/me.png")
    svc.delete_user(UserIdentity(user.id, user.email))
    assert user_repo.get_by_id(user.id) is None
