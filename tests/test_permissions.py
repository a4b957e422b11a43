"""

권한 테이블 / 권한 검사 의존성 테스트.
- 역할 판정(ALLOWED / UNDEFINED / ROLE_DENIED) 순수 함수 검증
- 익명 401, 정의되지 않은 조합 / 역할 불일치 403 메시지 구분
- 소유권 제한은 admin 에게도 적용

"""

import pytest

from peptitrace.core.permissions import (
    PERMISSION_TABLE,
    Operation,
    PermissionDecision,
    Resource,
    evaluate_permission,
    requires_ownership,
    submission_limit,
)
from peptitrace.models.user import Role
from tests.helpers import API, auth_header, create_experience_in_db, create_peptide_in_db, user_with_token


@pytest.mark.parametrize(
    "role,resource,operation,expected",
    [
        (Role.USER, Resource.EXPERIENCE, Operation.CREATE, PermissionDecision.ALLOWED),
        (Role.USER, Resource.PEPTIDE, Operation.CREATE, PermissionDecision.ROLE_DENIED),
        (Role.MODERATOR, Resource.PEPTIDE, Operation.UPDATE, PermissionDecision.ALLOWED),
        (Role.MODERATOR, Resource.PEPTIDE, Operation.DELETE, PermissionDecision.ROLE_DENIED),
        (Role.ADMIN, Resource.PEPTIDE, Operation.DELETE, PermissionDecision.ALLOWED),
        (Role.MODERATOR, Resource.USER, Operation.DELETE, PermissionDecision.ROLE_DENIED),
        (Role.USER, Resource.ANALYTICS, Operation.READ, PermissionDecision.ROLE_DENIED),
        (Role.MODERATOR, Resource.ANALYTICS, Operation.EXPORT, PermissionDecision.ALLOWED),
        (Role.ADMIN, Resource.VOTE, Operation.CREATE, PermissionDecision.UNDEFINED),
        (Role.ADMIN, Resource.ANALYTICS, Operation.DELETE, PermissionDecision.UNDEFINED),
    ],
)
def test_evaluate_permission(role, resource, operation, expected):
    assert evaluate_permission(role, resource, operation) == expected


UNDEFINED_PAIRS = [
    (resource, operation)
    for resource in Resource
    for operation in Operation
    if (resource, operation) not in PERMISSION_TABLE
]


@pytest.mark.parametrize("resource,operation", UNDEFINED_PAIRS)
@pytest.mark.parametrize("role", list(Role))
def test_pairs_missing_from_table_are_undefined_for_every_role(role, resource, operation):
    assert evaluate_permission(role, resource, operation) == PermissionDecision.UNDEFINED


def test_vote_has_no_table_entries():
    assert (Resource.VOTE, Operation.CREATE) in UNDEFINED_PAIRS
    assert all(resource != Resource.VOTE for resource, _ in PERMISSION_TABLE)


def test_ownership_applies_to_update_and_delete_only():
    assert requires_ownership(Resource.EXPERIENCE, Operation.UPDATE)
    assert requires_ownership(Resource.EXPERIENCE, Operation.DELETE)
    assert requires_ownership(Resource.USER, Operation.UPDATE)
    assert not requires_ownership(Resource.USER, Operation.READ)
    assert not requires_ownership(Resource.PEPTIDE, Operation.UPDATE)


def test_submission_limits_by_role():
    assert submission_limit(Role.USER) == 5
    assert submission_limit(Role.MODERATOR) == 20
    assert submission_limit(Role.ADMIN) == 50


def test_anonymous_request_is_401(client):
    r = client.get(f"{API}/experiences")
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Authentication required"}


def test_garbage_token_is_treated_as_anonymous(client):
    r = client.get(f"{API}/experiences", headers=auth_header("not-a-jwt"))
    assert r.status_code == 401
    assert r.json()["error"] == "Authentication required"


def test_role_denied_message(client, db_session):
    ctx = user_with_token(client, db_session)
    r = client.post(
        f"{API}/peptides",
        headers=auth_header(ctx["token"]),
        json={"name": "X"},
    )
    assert r.status_code == 403
    assert r.json()["error"] == "Insufficient permissions for create on peptide"


def test_moderator_cannot_delete_peptide(client, db_session):
    ctx = user_with_token(client, db_session, role=Role.MODERATOR)
    peptide = create_peptide_in_db(db_session)

    r = client.delete(f"{API}/peptides/{peptide.id}", headers=auth_header(ctx["token"]))
    assert r.status_code == 403
    assert r.json()["error"] == "Insufficient permissions for delete on peptide"


def test_ownership_binds_admin_too(client, db_session):
    owner = user_with_token(client, db_session)
    admin = user_with_token(client, db_session, role=Role.ADMIN)
    peptide = create_peptide_in_db(db_session)
    experience = create_experience_in_db(db_session, user=owner["user"], peptide=peptide)

    r = client.put(
        f"{API}/experiences/{experience.id}",
        headers=auth_header(admin["token"]),
        json={"dosage": "500 mcg"},
    )
    assert r.status_code == 403
    assert r.json()["error"] == "You can only modify your own data"

    r = client.delete(f"{API}/experiences/{experience.id}", headers=auth_header(admin["token"]))
    assert r.status_code == 403

    # 본인은 가능
    r = client.put(
        f"{API}/experiences/{experience.id}",
        headers=auth_header(owner["token"]),
        json={"dosage": "500 mcg"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["data"]["dosage"] == "500 mcg"


def test_user_can_update_only_own_profile(client, db_session):
    me = user_with_token(client, db_session)
    other = user_with_token(client, db_session)

    r = client.put(
        f"{API}/users/{other['user_id']}",
        headers=auth_header(me["token"]),
        json={"demographics": {"age": 30}},
    )
    assert r.status_code == 403
    assert r.json()["error"] == "You can only modify your own data"

    r = client.put(
        f"{API}/users/{me['user_id']}",
        headers=auth_header(me["token"]),
        json={"demographics": {"age": 30}},
    )
    assert r.status_code == 200, r.text
    assert r.json()["data"]["demographics"]["age"] == 30
