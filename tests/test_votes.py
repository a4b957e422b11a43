"""

경험 투표(upsert) 테스트.
- (사용자, 경험) 당 투표 1개: 두 사용자 → 레코드 2개
- 같은 사용자의 재투표는 기존 레코드 갱신 (201 → 200)
- helpful / total 카운터 동기화, 본인 투표 철회

"""

import uuid

from sqlalchemy import func, select

from peptitrace.models.vote import Vote
from tests.helpers import API, auth_header, create_experience_in_db, create_peptide_in_db, user_with_token


def test_vote_upsert_keeps_one_record_per_user(client, db_session):
    author = user_with_token(client, db_session)
    first = user_with_token(client, db_session)
    second = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=author["user"], peptide=peptide)
    url = f"{API}/experiences/{experience.id}/votes"

    r1 = client.post(url, headers=auth_header(first["token"]), json={"vote_type": "helpful"})
    assert r1.status_code == 201, r1.text
    vote_id = r1.json()["data"]["vote"]["id"]
    assert r1.json()["data"]["helpful_votes"] == 1
    assert r1.json()["data"]["total_votes"] == 1

    r2 = client.post(url, headers=auth_header(second["token"]), json={"vote_type": "detailed"})
    assert r2.status_code == 201, r2.text
    assert r2.json()["data"]["total_votes"] == 2

    # 같은 사용자의 재투표는 갱신
    r3 = client.post(url, headers=auth_header(first["token"]), json={"vote_type": "concerning"})
    assert r3.status_code == 200, r3.text
    assert r3.json()["message"] == "Vote updated"
    assert r3.json()["data"]["vote"]["id"] == vote_id
    assert r3.json()["data"]["vote"]["vote_type"] == "concerning"
    assert r3.json()["data"]["helpful_votes"] == 0
    assert r3.json()["data"]["total_votes"] == 2

    assert db_session.scalar(select(func.count(Vote.id))) == 2

    listing = client.get(url, headers=auth_header(author["token"]))
    assert listing.status_code == 200, listing.text
    assert listing.json()["data"]["total"] == 2


def test_my_vote_and_retract(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=ctx["user"], peptide=peptide)
    headers = auth_header(ctx["token"])
    me_url = f"{API}/experiences/{experience.id}/votes/me"

    assert client.get(me_url, headers=headers).json()["data"] is None

    client.post(f"{API}/experiences/{experience.id}/votes", headers=headers, json={"vote_type": "helpful"})
    mine = client.get(me_url, headers=headers).json()["data"]
    assert mine["vote_type"] == "helpful"

    r = client.delete(me_url, headers=headers)
    assert r.status_code == 200, r.text

    again = client.delete(me_url, headers=headers)
    assert again.status_code == 404
    assert again.json()["error"] == "Vote not found"

    detail = client.get(f"{API}/experiences/{experience.id}", headers=headers).json()["data"]
    assert detail["helpful_votes"] == 0
    assert detail["total_votes"] == 0


def test_vote_requires_auth_and_valid_type(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=ctx["user"], peptide=peptide)
    url = f"{API}/experiences/{experience.id}/votes"

    assert client.post(url, json={"vote_type": "helpful"}).status_code == 401
    bad = client.post(url, headers=auth_header(ctx["token"]), json={"vote_type": "love-it"})
    assert bad.status_code == 400


def test_vote_on_missing_experience_404(client, db_session):
    ctx = user_with_token(client, db_session)
    r = client.post(
        f"{API}/experiences/{uuid.uuid4()}/votes",
        headers=auth_header(ctx["token"]),
        json={"vote_type": "helpful"},
    )
    assert r.status_code == 404
    assert r.json()["error"] == "Experience not found"
