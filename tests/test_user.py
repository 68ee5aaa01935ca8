"""Tests for user and application access functions."""

import pytest

from jobly.db import run_query
from jobly.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.models import application, user
from jobly.security import verify_password

NEW_USER = {
    "username": "new",
    "password": "password",
    "firstName": "Test",
    "lastName": "Tester",
    "email": "test@test.com",
    "isAdmin": False,
}


def stored_hash(db, username):
    return run_query(db, "SELECT password FROM users WHERE username = $1", [username])[0]["password"]


class TestAuthenticate:
    def test_works(self, db):
        assert user.authenticate(db, "u1", "password1") == {
            "username": "u1",
            "firstName": "U1F",
            "lastName": "U1L",
            "email": "u1@email.com",
            "isAdmin": True,
        }

    def test_unknown_user(self, db):
        with pytest.raises(UnauthorizedError) as exc:
            user.authenticate(db, "nope", "password")
        assert exc.value.message == "Invalid username/password"

    def test_wrong_password(self, db):
        with pytest.raises(UnauthorizedError) as exc:
            user.authenticate(db, "u1", "wrong")
        assert exc.value.message == "Invalid username/password"

    def test_overlong_password(self, db):
        """Passwords bcrypt cannot hash fail like any wrong password."""
        for username in ("u1", "nope"):
            with pytest.raises(UnauthorizedError):
                user.authenticate(db, username, "x" * 100)


class TestRegister:
    def test_works(self, db):
        created = user.register(db, NEW_USER)
        assert created == {k: v for k, v in NEW_USER.items() if k != "password"}

    def test_password_is_hashed(self, db):
        user.register(db, NEW_USER)
        hashed = stored_hash(db, "new")
        assert hashed.startswith("$2b$")
        assert verify_password("password", hashed)

    def test_admin(self, db):
        assert user.register(db, {**NEW_USER, "isAdmin": True})["isAdmin"] is True

    def test_duplicate(self, db):
        with pytest.raises(BadRequestError) as exc:
            user.register(db, {**NEW_USER, "username": "u1"})
        assert exc.value.message == "Duplicate username: u1"


class TestFindAll:
    def test_works(self, db):
        users = user.find_all(db)
        assert [u["username"] for u in users] == ["u1", "u2"]
        assert users[1] == {
            "username": "u2",
            "firstName": "U2F",
            "lastName": "U2L",
            "email": "u2@email.com",
            "isAdmin": False,
        }


class TestGet:
    def test_includes_applications(self, db, applied):
        u1 = user.get(db, "u1")
        assert u1["isAdmin"] is True
        assert u1["applications"] == [applied]

    def test_no_applications(self, db):
        assert user.get(db, "u2")["applications"] == []

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            user.get(db, "nope")


class TestUpdate:
    def test_works(self, db):
        updated = user.update(db, "u2", {"firstName": "New", "email": "new@email.com"})
        assert updated["firstName"] == "New"
        assert updated["email"] == "new@email.com"
        assert updated["lastName"] == "U2L"

    def test_password_rehashed(self, db):
        data = {"password": "new-password"}
        user.update(db, "u2", data)
        assert data == {"password": "new-password"}
        assert verify_password("new-password", stored_hash(db, "u2"))
        assert user.authenticate(db, "u2", "new-password")["username"] == "u2"

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            user.update(db, "nope", {"firstName": "x"})

    def test_no_data(self, db):
        with pytest.raises(BadRequestError):
            user.update(db, "u1", {})

    def test_no_data_checked_before_lookup(self, db, monkeypatch):
        calls = []
        monkeypatch.setattr(user, "run_query", lambda *args: calls.append(args))
        with pytest.raises(BadRequestError):
            user.update(db, "nope", {})
        assert calls == []

    def test_password_too_long(self, db):
        with pytest.raises(BadRequestError):
            user.update(db, "u2", {"password": "é" * 40})
        assert user.authenticate(db, "u2", "password2")["username"] == "u2"


class TestRemove:
    def test_works(self, db):
        user.remove(db, "u2")
        with pytest.raises(NotFoundError):
            user.get(db, "u2")

    def test_not_found(self, db):
        with pytest.raises(NotFoundError):
            user.remove(db, "nope")


class TestApplications:
    def test_apply(self, db, job_ids):
        assert application.apply(db, "u2", job_ids["j2"]) == {"username": "u2", "jobId": job_ids["j2"]}
        assert application.job_ids_for(db, "u2") == [job_ids["j2"]]

    def test_apply_twice(self, db, applied):
        with pytest.raises(BadRequestError) as exc:
            application.apply(db, "u1", applied)
        assert exc.value.message == f"The user u1 has already applied to the job with id {applied}"

    def test_apply_unknown_job(self, db):
        with pytest.raises(NotFoundError):
            application.apply(db, "u1", 0)

    def test_apply_unknown_user(self, db, job_ids):
        with pytest.raises(NotFoundError):
            application.apply(db, "nope", job_ids["j1"])

    def test_ids_ascending(self, db, job_ids):
        application.apply(db, "u2", job_ids["j3"])
        application.apply(db, "u2", job_ids["j1"])
        assert application.job_ids_for(db, "u2") == sorted([job_ids["j1"], job_ids["j3"]])

    def test_withdraw(self, db, applied):
        application.withdraw(db, "u1", applied)
        assert application.job_ids_for(db, "u1") == []

    def test_withdraw_missing(self, db, job_ids):
        with pytest.raises(NotFoundError):
            application.withdraw(db, "u2", job_ids["j1"])

    def test_removing_user_removes_applications(self, db, applied):
        user.remove(db, "u1")
        assert run_query(db, "SELECT * FROM applications") == []
