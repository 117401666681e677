# apps/api/cms/services/admin_guard.py
"""
Son aktif admin koruması.

At all times at least one user with role='admin' and is_active=true must
remain (once any admin exists). Every user mutation that can lower that
count runs inside `admin_mutation_lock`, and the count is read inside the
same lock/transaction as the write, so two concurrent requests cannot both
observe "2 admins left" and both remove one.
"""
from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import text
from sqlalchemy.orm import Session

from cms.models.models import User

ADMIN_ROLE = "admin"

# pg_advisory_xact_lock / GET_LOCK anahtarı ("admin-role-mutation")
ADVISORY_LOCK_KEY = 804_112_771
ADVISORY_LOCK_NAME = "admin-role-mutation"
MYSQL_LOCK_TIMEOUT_SEC = 10

# Aynı process içindeki istekler (ve SQLite) için
_process_lock = threading.Lock()


class InvariantViolation(Exception):
    """Mutation rejected because it would break an administrator invariant."""


LAST_ADMIN_DEACTIVATE = "Cannot deactivate the last admin user. At least one admin must remain active."
LAST_ADMIN_ROLE_CHANGE = "Cannot change the role of the last admin user. At least one admin must remain active."
LAST_ADMIN_DELETE = "Cannot delete the last admin user. At least one admin must remain active."
SELF_DELETE = "You cannot delete your own account. Please ask another admin to delete your account."


@contextmanager
def admin_mutation_lock(db: Session) -> Iterator[None]:
    """
    Serializes admin-affecting mutations. The caller must commit (or roll back)
    before leaving the block; on error the session is rolled back here.
    """
    bind = db.get_bind()
    dialect = bind.dialect.name
    with _process_lock:
        lock_conn = None
        try:
            if dialect == "postgresql":
                # transaction sonunda (commit/rollback) kendiliğinden bırakılır
                db.execute(text("SELECT pg_advisory_xact_lock(:k)"), {"k": ADVISORY_LOCK_KEY})
            elif dialect in ("mysql", "mariadb"):
                # GET_LOCK bağlantıya ait; session commit edip bağlantıyı havuza bıraksa da
                # kilit bu ayrı bağlantıda blok sonuna kadar tutulur
                lock_conn = bind.connect()
                got = lock_conn.execute(
                    text("SELECT GET_LOCK(:n, :t)"), {"n": ADVISORY_LOCK_NAME, "t": MYSQL_LOCK_TIMEOUT_SEC}
                ).scalar()
                if got != 1:
                    raise RuntimeError("could not acquire admin-role-mutation lock")
            yield
        except Exception:
            db.rollback()
            raise
        finally:
            if lock_conn is not None:
                try:
                    lock_conn.execute(text("SELECT RELEASE_LOCK(:n)"), {"n": ADVISORY_LOCK_NAME})
                finally:
                    lock_conn.close()


def count_active_admins(db: Session) -> int:
    # FOR UPDATE: PG/MySQL'de aktif admin satırlarını kilitler (SQLite'ta yok sayılır)
    rows = (
        db.query(User.id)
        .filter(User.role == ADMIN_ROLE, User.is_active == True)  # noqa: E712
        .with_for_update()
        .all()
    )
    return len(rows)


def _is_counted(user: User) -> bool:
    return user.role == ADMIN_ROLE and bool(user.is_active)


def _reject(message: str, target: User) -> None:
    print(f"[admin-guard] rejected user_id={target.id}: {message}")
    raise InvariantViolation(message)


def check_update(db: Session, target: User, new_role: Optional[str], new_is_active: Optional[bool]) -> None:
    """
    Deactivation or a role change away from admin is rejected when `target`
    is the only active admin left.
    """
    if not _is_counted(target):
        return
    deactivating = new_is_active is False
    demoting = new_role is not None and new_role != ADMIN_ROLE
    if not (deactivating or demoting):
        return
    if count_active_admins(db) <= 1:
        _reject(LAST_ADMIN_DEACTIVATE if deactivating else LAST_ADMIN_ROLE_CHANGE, target)


def check_self_delete(target_id: int, requester: User) -> None:
    if target_id == requester.id:
        print(f"[admin-guard] rejected self-delete user_id={requester.id}")
        raise InvariantViolation(SELF_DELETE)


def check_delete(db: Session, target: User) -> None:
    if _is_counted(target) and count_active_admins(db) <= 1:
        _reject(LAST_ADMIN_DELETE, target)
