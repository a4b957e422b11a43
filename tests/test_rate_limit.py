"""

경험 제출 24시간 한도 테스트.
- user 는 5건까지, 6번째 429
- 24시간 지난 제출은 세지 않음, 철회한 제출은 계속 셈
- moderator 는 더 높은 한도

"""

from datetime import timedelta

from peptitrace.models.experience import Lifecycle
from peptitrace.models.user import Role
from tests.helpers import (
    API,
    auth_header,
    create_experience_in_db,
    create_peptide_in_db,
    experience_payload,
    user_with_token,
)


def _submit(client, token, peptide_id):
    return client.post(f"{API}/experiences", headers=auth_header(token), json=experience_payload(peptide_id))


def test_sixth_submission_is_rate_limited(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)

    for _ in range(5):
        r = _submit(client, ctx["token"], peptide.id)
        assert r.status_code == 201, r.text

    r = _submit(client, ctx["token"], peptide.id)
    assert r.status_code == 429
    assert r.json()["error"] == "Rate limit exceeded. Maximum 5 submissions per 24 hours."


def test_submissions_older_than_window_do_not_count(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)

    create_experience_in_db(db_session, user=ctx["user"], peptide=peptide, age=timedelta(hours=25))
    for _ in range(4):
        create_experience_in_db(db_session, user=ctx["user"], peptide=peptide)

    r = _submit(client, ctx["token"], peptide.id)
    assert r.status_code == 201, r.text

    r = _submit(client, ctx["token"], peptide.id)
    assert r.status_code == 429


def test_retracted_submissions_still_count(client, db_session):
    ctx = user_with_token(client, db_session)
    peptide = create_peptide_in_db(db_session)

    for _ in range(5):
        create_experience_in_db(db_session, user=ctx["user"], peptide=peptide, lifecycle=Lifecycle.RETRACTED)

    r = _submit(client, ctx["token"], peptide.id)
    assert r.status_code == 429


def test_moderator_has_higher_limit(client, db_session):
    ctx = user_with_token(client, db_session, role=Role.MODERATOR)
    peptide = create_peptide_in_db(db_session)

    for _ in range(5):
        create_experience_in_db(db_session, user=ctx["user"], peptide=peptide)

    r = _submit(client, ctx["token"], peptide.id)
    assert r.status_code == 201, r.text
