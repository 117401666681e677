# apps/api/cms/services/user_service.py
from __future__ import annotations
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from cms.core.security import hash_password, verify_password
from cms.models.models import User
from cms.services import admin_guard

PROFILE_FIELDS = ("name", "email", "image_url", "bio", "phone", "timezone", "language")


class EmailTaken(ValueError):
    pass


def list_users(db: Session, limit: int = 200, offset: int = 0) -> List[User]:
    return db.query(User).order_by(User.id.asc()).offset(offset).limit(limit).all()


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def _ensure_email_free(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    q = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        q = q.filter(User.id != exclude_id)
    if q.first():
        raise EmailTaken("Email already exists")


def create_user(db: Session, email: str, password: str, role: str, name: Optional[str] = None, is_active: bool = True) -> User:
    _ensure_email_free(db, email)
    u = User(email=email, name=name, password_hash=hash_password(password), role=role, is_active=is_active)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def update_user(db: Session, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
    """
    Partial update. Role / is_active changes go through the admin guard; the
    guard check and the write share one lock and one transaction.
    Returns None when the user does not exist.
    """
    with admin_guard.admin_mutation_lock(db):
        u = db.get(User, user_id)
        if not u:
            db.rollback()
            return None
        if changes.get("email") and changes["email"] != u.email:
            _ensure_email_free(db, changes["email"], exclude_id=u.id)
        admin_guard.check_update(db, u, changes.get("role"), changes.get("is_active"))
        for k, v in changes.items():
            if hasattr(u, k):
                setattr(u, k, v)
        db.commit()
    db.refresh(u)
    return u


def delete_user(db: Session, user_id: int, requester: User) -> bool:
    """False when the user does not exist; raises InvariantViolation on a guard rejection."""
    admin_guard.check_self_delete(user_id, requester)
    with admin_guard.admin_mutation_lock(db):
        u = db.get(User, user_id)
        if not u:
            db.rollback()
            return False
        admin_guard.check_delete(db, u)
        db.delete(u)
        db.commit()
    return True


def set_password(db: Session, user_id: int, new_password: str) -> bool:
    u = db.get(User, user_id)
    if not u:
        return False
    u.password_hash = hash_password(new_password)
    db.commit()
    return True


def update_profile(db: Session, user: User, changes: Dict[str, Any]) -> User:
    if changes.get("email") and changes["email"] != user.email:
        _ensure_email_free(db, changes["email"], exclude_id=user.id)
    for k, v in changes.items():
        if k in PROFILE_FIELDS and not (k == "email" and v is None):
            setattr(user, k, v)
    db.commit()
    db.refresh(user)
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Credential check only; the caller decides what an inactive account means."""
    u = get_by_email(db, email)
    if not u or not verify_password(password, u.password_hash):
        return None
    return u


def count_admins(db: Session) -> int:
    return db.query(User).filter(User.role == admin_guard.ADMIN_ROLE).count()
