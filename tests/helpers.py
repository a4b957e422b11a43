# tests/helpers.py
import uuid
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from peptitrace.core.security import PlaintextPassword, hash_password
from peptitrace.db.base import utcnow
from peptitrace.models.experience import Experience, generate_tracking_id
from peptitrace.models.peptide import Peptide, PeptideCategory
from peptitrace.models.user import Role, User, UserStatus, default_preferences

API = "/api"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_user_in_db(
    db: Session,
    *,
    email: str | None = None,
    password: str = "UserPassw0rd!",
    role: Role = Role.USER,
    status: UserStatus = UserStatus.APPROVED,
) -> User:
    email = email or f"{role.value}_{uuid.uuid4().hex[:6]}@test.com"
    user = User(
        email=email,
        username=f"{email.split('@')[0]}_{uuid.uuid4().hex[:4]}",
        password_hash=hash_password(PlaintextPassword(password)),
        role=role,
        status=status,
        approval_date=utcnow() if status == UserStatus.APPROVED else None,
        demographics={},
        preferences=default_preferences(),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(client, email: str, password: str) -> str:
    res = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return res.json()["data"]["access_token"]


def user_with_token(client, db: Session, *, role: Role = Role.USER,
                    status: UserStatus = UserStatus.APPROVED) -> dict:
    password = "UserPassw0rd!"
    user = create_user_in_db(db, password=password, role=role, status=status)
    token = login(client, user.email, password)
    return {"user": user, "user_id": str(user.id), "email": user.email,
            "password": password, "token": token}


def create_peptide_in_db(db: Session, *, name: str | None = None,
                         category: PeptideCategory = PeptideCategory.HEALING_RECOVERY,
                         common_effects=None, side_effects=None) -> Peptide:
    peptide = Peptide(
        name=name or f"PEP-{uuid.uuid4().hex[:6]}",
        peptide_sequence="Gly-Glu-Pro-Pro-Pro-Gly-Lys",
        category=category,
        description="Test peptide",
        detailed_description="Test peptide used by the test suite",
        mechanism="Binds to a receptor",
        common_dosage="250 mcg",
        common_frequency="daily",
        common_effects=common_effects if common_effects is not None else ["Tissue repair"],
        side_effects=side_effects if side_effects is not None else ["Mild nausea"],
        dosage_ranges={"low": "100 mcg", "medium": "250 mcg", "high": "500 mcg"},
        timeline={"onset": "1-2 days", "peak": "2 weeks", "duration": "4 weeks"},
    )
    db.add(peptide)
    db.commit()
    db.refresh(peptide)
    return peptide


def experience_payload(peptide_id, **overrides) -> dict:
    payload = {
        "peptide_id": str(peptide_id),
        "dosage": "250 mcg",
        "frequency": "daily",
        "duration": 4,
        "route_of_administration": "subcutaneous",
        "primary_purpose": ["recovery"],
        "demographics": {"age_range": "30-35", "biological_sex": "male", "activity_level": "active"},
        "outcomes": {"energy": 7, "recovery": 9},
        "effects": ["Tissue repair"],
        "timeline": "1-week",
        "story": "Shoulder felt better after two weeks.",
    }
    payload.update(overrides)
    return payload


def create_experience_in_db(db: Session, *, user: User | None, peptide: Peptide,
                            age: timedelta | None = None, **values) -> Experience:
    created_at = utcnow() - age if age else utcnow()
    experience = Experience(
        user_id=user.id if user else None,
        peptide_id=peptide.id,
        peptide_name=peptide.name,
        tracking_id=generate_tracking_id(),
        dosage=values.pop("dosage", "250 mcg"),
        frequency=values.pop("frequency", "daily"),
        duration=values.pop("duration", 4),
        route_of_administration=values.pop("route_of_administration", "subcutaneous"),
        outcomes=values.pop("outcomes", {"energy": 8}),
        timeline=values.pop("timeline", "1-week"),
        created_at=created_at,
        updated_at=created_at,
        **values,
    )
    db.add(experience)
    db.commit()
    db.refresh(experience)
    return experience


def get_user(db: Session, user_id: str) -> User:
    db.expire_all()
    return db.scalar(select(User).where(User.id == uuid.UUID(user_id)))
