"""

MODERATOR 비밀번호 재설정 스크립트.

- 지정한 이메일 계정의 비밀번호를 바꾸고 moderator / approved 로 맞춘다.
- 기존 refresh 토큰은 모두 무효화된다.

사용 방법
- (.venv) ~\backend~$ python -m scripts.reset_moderator_password mod@example.com 'new-password'

"""

import argparse
import sys

from dotenv import load_dotenv
load_dotenv()

from peptitrace.core.logging import setup_logging
from peptitrace.core.security import PlaintextPassword
from peptitrace.db.base import utcnow
from peptitrace.db.session import SessionLocal
from peptitrace.models.user import Role, UserStatus
from peptitrace.services import user as user_service


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Reset a moderator password")
    parser.add_argument("email")
    parser.add_argument("password")
    args = parser.parse_args(argv)

    setup_logging()
    db = SessionLocal()
    try:
        user = user_service.get_by_email(db, args.email.strip().lower())
        if user is None:
            print(f"❌ User not found: {args.email}")
            return 1

        user_service.set_password(db, user, PlaintextPassword(args.password))
        user.role = Role.MODERATOR
        user.status = UserStatus.APPROVED
        user.approval_date = user.approval_date or utcnow()
        db.commit()

        print(f"🔑 Moderator password reset for: {user.email}")
        return 0

    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
