"""

가입 승인 / 거절 플로우 테스트.
- /users/register 간편 가입 (토큰 없음, username 접미사)
- 대기 목록은 moderator 이상만 조회
- 승인 / 거절 중복 처리, 거절 메모, 일반 사용자 승인 시도 403

"""

import uuid

from peptitrace.models.user import Role, UserStatus
from tests.helpers import API, auth_header, create_user_in_db, get_user, user_with_token


def _register(client) -> dict:
    email = f"guest_{uuid.uuid4().hex[:6]}@test.com"
    r = client.post(f"{API}/users/register", json={"email": email, "password": "UserPassw0rd!"})
    assert r.status_code == 201, r.text
    return r.json()


def test_users_register_returns_pending_without_tokens(client):
    body = _register(client)
    assert body["message"] == "Registration successful. Your account is pending approval."
    data = body["data"]
    assert data["status"] == "pending"
    assert "access_token" not in data
    local = data["email"].split("@")[0]
    assert data["username"].startswith(f"{local}_")
    assert len(data["username"]) == len(local) + 7


def test_pending_list_and_approve(client, db_session):
    user_id = _register(client)["data"]["id"]
    moderator = user_with_token(client, db_session, role=Role.MODERATOR)

    pending = client.get(f"{API}/users/pending", headers=auth_header(moderator["token"]))
    assert pending.status_code == 200, pending.text
    assert user_id in [u["id"] for u in pending.json()["data"]]

    approve = client.post(f"{API}/users/{user_id}/approve", headers=auth_header(moderator["token"]))
    assert approve.status_code == 200, approve.text

    again = client.post(f"{API}/users/{user_id}/approve", headers=auth_header(moderator["token"]))
    assert again.status_code == 400
    assert again.json()["error"] == "User already approved"

    pending = client.get(f"{API}/users/pending", headers=auth_header(moderator["token"]))
    assert user_id not in [u["id"] for u in pending.json()["data"]]


def test_reject_with_notes(client, db_session):
    user_id = _register(client)["data"]["id"]
    admin = user_with_token(client, db_session, role=Role.ADMIN)

    reject = client.post(
        f"{API}/users/{user_id}/reject",
        headers=auth_header(admin["token"]),
        json={"notes": "duplicate account"},
    )
    assert reject.status_code == 200, reject.text
    assert reject.json()["data"]["status"] == "rejected"
    assert reject.json()["data"]["moderator_notes"] == "duplicate account"

    stored = get_user(db_session, user_id)
    assert stored.status == UserStatus.REJECTED
    assert stored.refresh_token_id is None


def test_user_cannot_moderate(client, db_session):
    target = create_user_in_db(db_session, status=UserStatus.PENDING)
    ctx = user_with_token(client, db_session)

    r = client.post(f"{API}/users/{target.id}/approve", headers=auth_header(ctx["token"]))
    assert r.status_code == 403
    assert r.json()["error"] == "Moderator access required"

    r = client.get(f"{API}/users/pending", headers=auth_header(ctx["token"]))
    assert r.status_code == 403
    assert r.json()["error"] == "Insufficient permissions for moderate on user"


def test_rejected_user_token_is_not_active(client, db_session):
    ctx = user_with_token(client, db_session)
    moderator = user_with_token(client, db_session, role=Role.MODERATOR)

    client.post(f"{API}/users/{ctx['user_id']}/reject", headers=auth_header(moderator["token"]))

    r = client.get(f"{API}/users/me", headers=auth_header(ctx["token"]))
    assert r.status_code == 401
    assert r.json()["error"] == "Account not active"


def test_approve_unknown_user_404(client, db_session):
    moderator = user_with_token(client, db_session, role=Role.MODERATOR)
    r = client.post(f"{API}/users/{uuid.uuid4()}/approve", headers=auth_header(moderator["token"]))
    assert r.status_code == 404
    assert r.json()["error"] == "User not found"
