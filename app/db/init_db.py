from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.authz.roles import Role as RoleName
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.security import Role, User


def init_db() -> None:
    """
    Create tables + seed demo data.

    Small and deterministic so the permission rules can be tried right away
    with the `dummy` provider (`Authorization: Bearer <user id>`).
    """

    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        if _has_seed_data(db):
            return
        _seed(db)


def _has_seed_data(db: Session) -> bool:
    return db.execute(select(Role.id).limit(1)).first() is not None


def _seed(db: Session) -> None:
    user = Role(name=RoleName.USER.value, description="Regular user")
    admin = Role(name=RoleName.ADMIN.value, description="Administrator")
    super_admin = Role(name=RoleName.SUPER_ADMIN.value, description="Super administrator")
    db.add_all([user, admin, super_admin])
    db.flush()

    u1 = User(id="u1", username="uma_user", email="uma.user@example.com", is_active=True)
    u1.roles.append(user)

    u2 = User(id="u2", username="ulf_user", email="ulf.user@example.com", is_active=True)
    u2.roles.append(user)

    a1 = User(id="a1", username="ada_admin", email="ada.admin@example.com", is_active=True)
    a1.roles.append(admin)

    a2 = User(id="a2", username="abe_admin", email="abe.admin@example.com", is_active=True)
    a2.roles.append(admin)

    s1 = User(id="s1", username="sue_super", email="sue.super@example.com", is_active=True)
    s1.roles.append(super_admin)

    db.add_all([u1, u2, a1, a2, s1])
    db.commit()
