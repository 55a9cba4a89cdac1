import pytest

from sapients.core.exceptions import ResourceConflictError, ValidationError
from sapients.core.security import verify_password
from sapients.models.role import Role
from sapients.services import auth_service as auth_module
from sapients.services.auth_service import auth_service

from conftest import DEFAULT_PASSWORD


def test_authenticate_valid_credentials(db, make_user):
    user = make_user(email="writer@sapients.test", role=Role.WRITER)
    assert auth_service.authenticate_user(db, "writer@sapients.test", DEFAULT_PASSWORD).id == user.id


def test_email_lookup_is_case_insensitive(db, make_user):
    user = make_user(email="Lead.Artist@Sapients.test")
    assert user.email == "lead.artist@sapients.test"
    found = auth_service.authenticate_user(db, "  LEAD.ARTIST@sapients.TEST ", DEFAULT_PASSWORD)
    assert found is not None and found.id == user.id


def test_unknown_email_and_wrong_password_look_the_same(db, make_user, monkeypatch):
    make_user(email="real@sapients.test")
    checks = []
    real_verify = auth_module.verify_password

    def _counting_verify(plain, hashed):
        checks.append(hashed)
        return real_verify(plain, hashed)

    monkeypatch.setattr(auth_module, "verify_password", _counting_verify)

    missing = auth_service.authenticate_user(db, "nouser@x.com", "whatever")
    wrong = auth_service.authenticate_user(db, "real@sapients.test", "wrongpassword")

    assert missing is None and wrong is None
    assert type(missing) is type(wrong)
    # A hash comparison runs on both paths
    assert len(checks) == 2


def test_password_hash_is_salted_bcrypt(db, make_user):
    a = make_user(email="a@sapients.test")
    b = make_user(email="b@sapients.test")
    assert a.password_hash != b.password_hash
    assert a.password_hash.startswith("$2")
    assert DEFAULT_PASSWORD not in a.password_hash
    assert verify_password(DEFAULT_PASSWORD, auth_service.hash_password(DEFAULT_PASSWORD))


def test_verify_password_rejects_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_duplicate_email_conflicts(db, make_user):
    make_user(email="dup@sapients.test")
    with pytest.raises(ResourceConflictError):
        make_user(email="DUP@sapients.test")


@pytest.mark.parametrize("password", ["", "b" * 73, "é" * 37])
def test_create_user_rejects_unhashable_passwords(db, make_user, password):
    with pytest.raises(ValidationError):
        make_user(email="long@sapients.test", password=password)


def test_create_user_accepts_72_byte_password(db, make_user):
    user = make_user(email="edge@sapients.test", password="b" * 72)
    assert auth_service.authenticate_user(db, "edge@sapients.test", "b" * 72).id == user.id
