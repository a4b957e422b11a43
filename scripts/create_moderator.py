"""

초기 MODERATOR 계정 생성 스크립트.

- 서버 최초 세팅 시 한 번 실행하는 용도
- .env 에 정의된 INITIAL_MODERATOR_EMAIL / INITIAL_MODERATOR_PASSWORD 를 읽어
  승인(approved) 상태의 moderator 계정을 만든다.
- moderator 가 이미 있으면 아무것도 하지 않는다.
- 같은 이메일의 일반 계정이 있으면 moderator 로 승격한다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.create_moderator

"""

import sys

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy import select

from peptitrace.core.config import settings
from peptitrace.core.logging import setup_logging
from peptitrace.core.security import PlaintextPassword, hash_password
from peptitrace.db.base import utcnow
from peptitrace.db.session import SessionLocal
from peptitrace.models.user import Role, User, UserStatus, default_preferences


def main() -> int:
    setup_logging()
    db = SessionLocal()
    try:
        existing = db.scalar(select(User).where(User.role == Role.MODERATOR))
        if existing:
            print(f"✅ Moderator already exists: {existing.email}")
            return 0

        email = settings.INITIAL_MODERATOR_EMAIL
        password = settings.INITIAL_MODERATOR_PASSWORD
        if not email or not password:
            print("❌ INITIAL_MODERATOR_EMAIL and INITIAL_MODERATOR_PASSWORD must be set in .env")
            return 1

        email = email.strip().lower()
        user = db.scalar(select(User).where(User.email == email))
        if user:
            user.role = Role.MODERATOR
            user.status = UserStatus.APPROVED
            user.approval_date = user.approval_date or utcnow()
            db.commit()
            print(f"🔼 Promoted existing user to moderator: {email}")
            return 0

        user = User(
            email=email,
            username=f"{email.split('@')[0]}_mod",
            password_hash=hash_password(PlaintextPassword(password)),
            role=Role.MODERATOR,
            status=UserStatus.APPROVED,
            approval_date=utcnow(),
            demographics={},
            preferences=default_preferences(),
        )
        db.add(user)
        db.commit()

        print(f"🚀 Moderator created: {email}")
        return 0

    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
