"""

사용자 프로필 API 테스트.
- /users/me 조회 / 수정, preferences 깊은 병합
- height 단위 변환(ft <-> cm) 및 범위 검사
- 관리자 삭제 (본인 삭제 금지), 사용자 통계

"""

from peptitrace.models.user import Role
from peptitrace.services import user as user_service
from tests.helpers import API, auth_header, create_experience_in_db, create_peptide_in_db, get_user, user_with_token


def test_me_hides_secrets(client, db_session):
    ctx = user_with_token(client, db_session)
    r = client.get(f"{API}/users/me", headers=auth_header(ctx["token"]))
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["id"] == ctx["user_id"]
    assert "password_hash" not in data
    assert "refresh_token_id" not in data
    assert "moderator_notes" not in data


def test_update_preferences_merges(client, db_session):
    ctx = user_with_token(client, db_session)
    r = client.put(
        f"{API}/users/me",
        headers=auth_header(ctx["token"]),
        json={"preferences": {"privacy": {"share_weight": True}}},
    )
    assert r.status_code == 200, r.text
    prefs = r.json()["data"]["preferences"]
    assert prefs["privacy"]["share_weight"] is True
    assert prefs["privacy"]["share_age"] is True
    assert prefs["units"]["height"] == "cm"
    assert r.json()["data"]["profile_updated_at"] is not None


def test_height_in_feet_is_stored_in_cm(client, db_session):
    ctx = user_with_token(client, db_session)
    headers = auth_header(ctx["token"])

    r = client.put(
        f"{API}/users/me",
        headers=headers,
        json={"preferences": {"units": {"height": "ft"}}, "demographics": {"height": 6}},
    )
    assert r.status_code == 200, r.text
    # 응답은 ft 로 변환
    assert r.json()["data"]["demographics"]["height"] == 6.0

    assert get_user(db_session, ctx["user_id"]).demographics["height"] == 183


def test_height_out_of_range(client, db_session):
    ctx = user_with_token(client, db_session)
    r = client.put(f"{API}/users/me", headers=auth_header(ctx["token"]), json={"demographics": {"height": 300}})
    assert r.status_code == 400
    assert r.json()["error"] == "Height must be between 100 and 250 cm"


def test_admin_delete_user_keeps_experiences_anonymous(client, db_session):
    admin = user_with_token(client, db_session, role=Role.ADMIN)
    victim = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=victim["user"], peptide=peptide)

    own = client.delete(f"{API}/users/{admin['user_id']}", headers=auth_header(admin["token"]))
    assert own.status_code == 400
    assert own.json()["error"] == "Cannot delete your own account"

    r = client.delete(f"{API}/users/{victim['user_id']}", headers=auth_header(admin["token"]))
    assert r.status_code == 200, r.text

    detail = client.get(f"{API}/experiences/{experience.id}", headers=auth_header(admin["token"]))
    assert detail.status_code == 200, detail.text
    assert detail.json()["data"]["user_id"] is None


def test_user_overview_counts(client, db_session):
    moderator = user_with_token(client, db_session, role=Role.MODERATOR)
    user_with_token(client, db_session)

    r = client.get(f"{API}/users/analytics/overview", headers=auth_header(moderator["token"]))
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["total_users"] == 2
    assert data["by_role"]["moderator"] == 1
    assert data["by_status"]["approved"] == 2


def test_username_taken_at_store_level_is_400(client, db_session, monkeypatch):
    ctx = user_with_token(client, db_session)
    other = user_with_token(client, db_session)
    monkeypatch.setattr(user_service, "get_by_username", lambda db, username: None)

    r = client.put(
        f"{API}/users/me",
        headers=auth_header(ctx["token"]),
        json={"username": other["user"].username},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Username already taken"
    assert get_user(db_session, ctx["user_id"]).username != other["user"].username
