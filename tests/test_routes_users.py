"""Tests for /users routes."""

from jobly.security import decode_token

NEW_USER = {
    "username": "new",
    "password": "password-new",
    "firstName": "First",
    "lastName": "Last",
    "email": "new@email.com",
    "isAdmin": False,
}


class TestCreate:
    def test_admin(self, client, u1_headers):
        resp = client.post("/users", json=NEW_USER, headers=u1_headers)
        assert resp.status_code == 201
        body = resp.json()
        assert body["user"] == {k: v for k, v in NEW_USER.items() if k != "password"}
        assert decode_token(body["token"])["username"] == "new"

    def test_create_admin(self, client, u1_headers):
        resp = client.post("/users", json={**NEW_USER, "isAdmin": True}, headers=u1_headers)
        assert resp.json()["user"]["isAdmin"] is True

    def test_not_admin(self, client, u2_headers):
        assert client.post("/users", json=NEW_USER, headers=u2_headers).status_code == 403

    def test_anon(self, client):
        assert client.post("/users", json=NEW_USER).status_code == 401


class TestList:
    def test_admin(self, client, u1_headers):
        resp = client.get("/users", headers=u1_headers)
        assert [u["username"] for u in resp.json()["users"]] == ["u1", "u2"]
        assert "password" not in resp.json()["users"][0]

    def test_not_admin(self, client, u2_headers):
        assert client.get("/users", headers=u2_headers).status_code == 403


class TestGet:
    def test_self(self, client, u2_headers):
        resp = client.get("/users/u2", headers=u2_headers)
        assert resp.json() == {
            "user": {
                "username": "u2",
                "firstName": "U2F",
                "lastName": "U2L",
                "email": "u2@email.com",
                "isAdmin": False,
                "applications": [],
            }
        }

    def test_admin_sees_applications(self, client, u1_headers, applied):
        resp = client.get("/users/u1", headers=u1_headers)
        assert resp.json()["user"]["applications"] == [applied]

    def test_other_user(self, client, u2_headers):
        assert client.get("/users/u1", headers=u2_headers).status_code == 403

    def test_not_found(self, client, u1_headers):
        assert client.get("/users/nope", headers=u1_headers).status_code == 404


class TestUpdate:
    def test_self(self, client, u2_headers):
        resp = client.patch("/users/u2", json={"firstName": "New"}, headers=u2_headers)
        assert resp.status_code == 200
        assert resp.json()["user"]["firstName"] == "New"

    def test_password(self, client, u2_headers):
        client.patch("/users/u2", json={"password": "changed"}, headers=u2_headers)
        resp = client.post("/auth/token", json={"username": "u2", "password": "changed"})
        assert resp.status_code == 200

    def test_self_cannot_become_admin(self, client, u2_headers):
        resp = client.patch("/users/u2", json={"isAdmin": True}, headers=u2_headers)
        assert resp.status_code == 403

    def test_admin_can_promote(self, client, u1_headers):
        resp = client.patch("/users/u2", json={"isAdmin": True}, headers=u1_headers)
        assert resp.json()["user"]["isAdmin"] is True

    def test_username_is_immutable(self, client, u2_headers):
        resp = client.patch("/users/u2", json={"username": "other"}, headers=u2_headers)
        assert resp.status_code == 400

    def test_null_field(self, client, u2_headers):
        resp = client.patch("/users/u2", json={"firstName": None}, headers=u2_headers)
        assert resp.status_code == 400

    def test_password_over_72_bytes(self, client, u2_headers):
        resp = client.patch("/users/u2", json={"password": "é" * 40}, headers=u2_headers)
        assert resp.status_code == 400

    def test_other_user(self, client, u2_headers):
        assert client.patch("/users/u1", json={"firstName": "x"}, headers=u2_headers).status_code == 403


class TestDelete:
    def test_self(self, client, u2_headers, u1_headers):
        assert client.delete("/users/u2", headers=u2_headers).json() == {"deleted": "u2"}
        assert client.get("/users/u2", headers=u1_headers).status_code == 404

    def test_other_user(self, client, u2_headers):
        assert client.delete("/users/u1", headers=u2_headers).status_code == 403


class TestApplications:
    def test_apply(self, client, u2_headers, job_ids):
        resp = client.post(f"/users/u2/jobs/{job_ids['j3']}", headers=u2_headers)
        assert resp.json() == {"applied": job_ids["j3"]}
        user = client.get("/users/u2", headers=u2_headers).json()["user"]
        assert user["applications"] == [job_ids["j3"]]

    def test_apply_twice(self, client, u1_headers, applied):
        resp = client.post(f"/users/u1/jobs/{applied}", headers=u1_headers)
        assert resp.status_code == 400

    def test_unknown_job(self, client, u2_headers):
        assert client.post("/users/u2/jobs/0", headers=u2_headers).status_code == 404

    def test_admin_for_other_user(self, client, u1_headers, job_ids):
        resp = client.post(f"/users/u2/jobs/{job_ids['j1']}", headers=u1_headers)
        assert resp.json() == {"applied": job_ids["j1"]}

    def test_other_user(self, client, u2_headers, job_ids):
        assert client.post(f"/users/u1/jobs/{job_ids['j1']}", headers=u2_headers).status_code == 403

    def test_withdraw(self, client, u1_headers, applied):
        resp = client.delete(f"/users/u1/jobs/{applied}", headers=u1_headers)
        assert resp.json() == {"withdrawn": applied}
        assert client.get("/users/u1", headers=u1_headers).json()["user"]["applications"] == []

    def test_withdraw_missing(self, client, u2_headers, job_ids):
        assert client.delete(f"/users/u2/jobs/{job_ids['j1']}", headers=u2_headers).status_code == 404
