"""
permissions.py

리소스 x 작업(operation) 권한 테이블 및 판정 로직.

이 파일은 HTTP / DB 에 의존하지 않는 순수 함수만 제공한다.
실제 요청 단위 검사(본인 소유 확인, 로그 기록, HTTP 예외 변환)는
peptitrace.core.deps.require_permission 에서 수행한다.

주요 기능:
- (resource, operation) -> 허용 역할 집합 + 소유권 제한 여부 테이블
- 역할 기준 판정: ALLOWED / UNDEFINED / ROLE_DENIED
- 경험 등록 24시간 제출 한도(역할별)

설계 원칙:
- 테이블에 없는 조합은 "정의되지 않음(UNDEFINED)" 으로 명시적으로 거부
  (역할 불일치 ROLE_DENIED 와 구분, HTTP 상태는 둘 다 403)
- 소유권 제한(owner_scoped) 항목은 역할과 무관하게 본인 확인을 거친다
  (moderator / admin 도 면제되지 않음)

관련 파일:
- peptitrace.core.deps       : require_permission / 제출 한도 의존성
- peptitrace.models.user     : Role

"""

from dataclasses import dataclass
from enum import Enum

from peptitrace.models.user import Role


class Resource(str, Enum):
    EXPERIENCE = "experience"
    PEPTIDE = "peptide"
    USER = "user"
    ANALYTICS = "analytics"
    VOTE = "vote"


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MODERATE = "moderate"
    EXPORT = "export"


class PermissionDecision(str, Enum):
    ALLOWED = "allowed"
    UNDEFINED = "undefined"
    ROLE_DENIED = "role_denied"


@dataclass(frozen=True)
class PermissionRule:
    roles: frozenset
    owner_scoped: bool = False


_ALL = frozenset({Role.USER, Role.MODERATOR, Role.ADMIN})
_STAFF = frozenset({Role.MODERATOR, Role.ADMIN})
_ADMIN = frozenset({Role.ADMIN})


PERMISSION_TABLE: dict[tuple[Resource, Operation], PermissionRule] = {
    (Resource.EXPERIENCE, Operation.CREATE): PermissionRule(_ALL),
    (Resource.EXPERIENCE, Operation.READ): PermissionRule(_ALL),
    (Resource.EXPERIENCE, Operation.UPDATE): PermissionRule(_ALL, owner_scoped=True),
    (Resource.EXPERIENCE, Operation.DELETE): PermissionRule(_ALL, owner_scoped=True),
    (Resource.EXPERIENCE, Operation.MODERATE): PermissionRule(_STAFF),

    (Resource.PEPTIDE, Operation.CREATE): PermissionRule(_STAFF),
    (Resource.PEPTIDE, Operation.READ): PermissionRule(_ALL),
    (Resource.PEPTIDE, Operation.UPDATE): PermissionRule(_STAFF),
    (Resource.PEPTIDE, Operation.DELETE): PermissionRule(_ADMIN),
    (Resource.PEPTIDE, Operation.MODERATE): PermissionRule(_STAFF),

    (Resource.USER, Operation.CREATE): PermissionRule(_STAFF),
    # read 의 owner_scoped 는 표기만 (본인 확인은 OWNERSHIP_OPERATIONS 에만 적용)
    (Resource.USER, Operation.READ): PermissionRule(_ALL, owner_scoped=True),
    (Resource.USER, Operation.UPDATE): PermissionRule(_ALL, owner_scoped=True),
    (Resource.USER, Operation.DELETE): PermissionRule(_ADMIN),
    (Resource.USER, Operation.MODERATE): PermissionRule(_STAFF),

    (Resource.ANALYTICS, Operation.READ): PermissionRule(_STAFF),
    (Resource.ANALYTICS, Operation.EXPORT): PermissionRule(_STAFF),
}

# 소유권 검사가 실제로 적용되는 작업
OWNERSHIP_OPERATIONS = frozenset({Operation.UPDATE, Operation.DELETE})


def lookup_rule(resource: Resource, operation: Operation) -> PermissionRule | None:
    return PERMISSION_TABLE.get((Resource(resource), Operation(operation)))


def evaluate_permission(role: Role, resource: Resource, operation: Operation) -> PermissionDecision:
    """역할 기준 1차 판정. 소유권은 여기서 보지 않는다."""
    rule = lookup_rule(resource, operation)
    if rule is None:
        return PermissionDecision.UNDEFINED
    if Role(role) not in rule.roles:
        return PermissionDecision.ROLE_DENIED
    return PermissionDecision.ALLOWED


def requires_ownership(resource: Resource, operation: Operation) -> bool:
    rule = lookup_rule(resource, operation)
    return bool(rule and rule.owner_scoped and Operation(operation) in OWNERSHIP_OPERATIONS)


def undefined_message(resource: Resource, operation: Operation) -> str:
    return f"Operation {Operation(operation).value} on {Resource(resource).value} not defined"


def denied_message(resource: Resource, operation: Operation) -> str:
    return f"Insufficient permissions for {Operation(operation).value} on {Resource(resource).value}"


OWNERSHIP_MESSAGE = "You can only modify your own data"


# 경험 등록 24시간 제출 한도 (역할별)
SUBMISSION_WINDOW_HOURS = 24
SUBMISSION_LIMITS = {
    Role.USER: 5,
    Role.MODERATOR: 20,
    Role.ADMIN: 50,
}


def submission_limit(role: Role) -> int:
    return SUBMISSION_LIMITS.get(Role(role), SUBMISSION_LIMITS[Role.USER])


def rate_limit_message(limit: int) -> str:
    return f"Rate limit exceeded. Maximum {limit} submissions per {SUBMISSION_WINDOW_HOURS} hours."
