"""
types.py

도메인 전용 컬럼 타입.

- PasswordHashType : HashedPassword 만 저장 가능한 문자열 컬럼.
  평문 문자열이 바인딩되면 flush 단계에서 TypeError.
- str_enum         : Enum 값 문자열 저장 (PostgreSQL / SQLite 공통)

"""

from sqlalchemy import Enum as SAEnum, String
from sqlalchemy.types import TypeDecorator

from peptitrace.core.security import HashedPassword


class PasswordHashType(TypeDecorator):
    impl = String(255)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, HashedPassword):
            raise TypeError("only HashedPassword values may be stored")
        return value.value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return HashedPassword(value)


def str_enum(enum_cls, length: int = 32) -> SAEnum:
    """Enum 을 값(value) 문자열로 저장하는 이식성 있는 컬럼 타입"""
    return SAEnum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=length,
        validate_strings=True,
    )
