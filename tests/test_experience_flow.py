"""

경험(Experience) 제출 / 조회 / 수정 / 철회 통합 테스트.
- 제출 성공 시 TRK- tracking id 발급, 펩타이드 이름 비정규화
- 없는 펩타이드 참조 시 404 + 아무것도 저장되지 않음
- 허니팟(website) 400, outcomes 누락 400
- 철회된 경험은 모든 조회 경로에서 제외

"""

import uuid

import pytest
from sqlalchemy import func, select

from peptitrace.models.experience import Experience, Lifecycle
from tests.helpers import (
    API,
    auth_header,
    create_experience_in_db,
    create_peptide_in_db,
    experience_payload,
    user_with_token,
)


def test_submit_experience_ok(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session, name="BPC-157")

    r = client.post(
        f"{API}/experiences",
        headers=auth_header(ctx["token"]),
        json=experience_payload(peptide.id),
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["message"] == "Experience submitted successfully"

    data = body["data"]
    assert data["tracking_id"].startswith("TRK-")
    assert data["peptide_name"] == "BPC-157"
    assert data["user_id"] == ctx["user_id"]
    assert data["lifecycle"] == "active"
    assert data["is_active"] is True
    assert data["average_rating"] == 8.0
    assert data["helpful_votes"] == 0 and data["total_votes"] == 0

    by_tracking = client.get(
        f"{API}/experiences/tracking/{data['tracking_id']}", headers=auth_header(ctx["token"])
    )
    assert by_tracking.status_code == 200, by_tracking.text
    assert by_tracking.json()["data"]["id"] == data["id"]


def test_submit_with_unknown_peptide_persists_nothing(client, db_session):
    ctx = user_with_token(client, db_session)

    r = client.post(
        f"{API}/experiences",
        headers=auth_header(ctx["token"]),
        json=experience_payload(uuid.uuid4()),
    )
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Peptide not found"}

    assert db_session.scalar(select(func.count(Experience.id))) == 0


def test_honeypot_submission_rejected(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)

    r = client.post(
        f"{API}/experiences",
        headers=auth_header(ctx["token"]),
        json=experience_payload(peptide.id, website="http://spam.example"),
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid submission"
    assert db_session.scalar(select(func.count(Experience.id))) == 0


def test_empty_outcomes_rejected(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)

    r = client.post(
        f"{API}/experiences",
        headers=auth_header(ctx["token"]),
        json=experience_payload(peptide.id, outcomes={}),
    )
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_story_too_long_rejected(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)

    r = client.post(
        f"{API}/experiences",
        headers=auth_header(ctx["token"]),
        json=experience_payload(peptide.id, story="x" * 1001),
    )
    assert r.status_code == 400


def test_retracted_experience_is_hidden(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=ctx["user"], peptide=peptide)
    headers = auth_header(ctx["token"])

    r = client.delete(f"{API}/experiences/{experience.id}", headers=headers)
    assert r.status_code == 200, r.text

    # 레코드는 남아 있음 (soft delete)
    db_session.expire_all()
    stored = db_session.get(Experience, experience.id)
    assert stored.lifecycle == Lifecycle.RETRACTED

    assert client.get(f"{API}/experiences/{experience.id}", headers=headers).status_code == 404
    tracking = client.get(f"{API}/experiences/tracking/{experience.tracking_id}", headers=headers)
    assert tracking.status_code == 404
    assert tracking.json()["error"] == "Experience not found with this tracking ID"

    listing = client.get(f"{API}/experiences", headers=headers).json()["data"]
    assert listing["total"] == 0
    assert client.get(f"{API}/experiences/peptide/{peptide.id}").json()["data"]["total"] == 0
    assert client.get(f"{API}/experiences/user/{ctx['user_id']}", headers=headers).json()["data"]["total"] == 0
    assert client.get(f"{API}/experiences/home/public").json()["data"]["experiences"] == []


def test_list_pagination_and_filter(client, db_session):
    ctx = user_with_token(client, db_session)
    first = create_peptide_in_db(db_session)
    second = create_peptide_in_db(db_session)
    for _ in range(3):
        create_experience_in_db(db_session, user=ctx["user"], peptide=first)
    create_experience_in_db(db_session, user=ctx["user"], peptide=second)
    headers = auth_header(ctx["token"])

    page = client.get(f"{API}/experiences?limit=2&offset=0", headers=headers).json()["data"]
    assert page["total"] == 4
    assert len(page["experiences"]) == 2
    assert page["limit"] == 2

    filtered = client.get(f"{API}/experiences?peptide_id={second.id}", headers=headers).json()["data"]
    assert filtered["total"] == 1
    assert filtered["experiences"][0]["peptide_id"] == str(second.id)


def test_home_public_returns_latest_three_without_auth(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    for _ in range(4):
        create_experience_in_db(db_session, user=ctx["user"], peptide=peptide, story="ok")

    r = client.get(f"{API}/experiences/home/public")
    assert r.status_code == 200, r.text
    items = r.json()["data"]["experiences"]
    assert len(items) == 3
    assert set(items[0]) == {"id", "peptide_name", "created_at", "story", "dosage", "outcomes"}


def test_update_experience_changes_peptide(client, db_session):
    ctx = user_with_token(client, db_session)
    old = create_peptide_in_db(db_session)
    new = create_peptide_in_db(db_session, name="TB-500")
    experience = create_experience_in_db(db_session, user=ctx["user"], peptide=old)

    r = client.put(
        f"{API}/experiences/{experience.id}",
        headers=auth_header(ctx["token"]),
        json={"peptide_id": str(new.id), "story": None},
    )
    assert r.status_code == 200, r.text
    data = r.json()["data"]
    assert data["peptide_name"] == "TB-500"
    assert data["tracking_id"] == experience.tracking_id
    assert data["story"] is None


def test_tracking_id_lookup_is_exact_and_case_sensitive(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=ctx["user"], peptide=peptide)
    headers = auth_header(ctx["token"])
    tracking_id = experience.tracking_id

    exact = client.get(f"{API}/experiences/tracking/{tracking_id}", headers=headers)
    assert exact.status_code == 200, exact.text

    for variant in (tracking_id.swapcase(), tracking_id.lower(), f"{tracking_id}0", tracking_id[:-1]):
        if variant == tracking_id:
            continue
        r = client.get(f"{API}/experiences/tracking/{variant}", headers=headers)
        assert r.status_code == 404, variant
        assert r.json()["error"] == "Experience not found with this tracking ID"


def test_tracking_id_cannot_be_reassigned(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=ctx["user"], peptide=peptide)
    original = experience.tracking_id

    with pytest.raises(ValueError):
        experience.tracking_id = "TRK-000000000000"

    # 같은 값 재할당은 허용
    experience.tracking_id = original
    db_session.commit()
    db_session.expire_all()
    assert db_session.get(Experience, experience.id).tracking_id == original
