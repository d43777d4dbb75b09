"""
Database records for the Task Dashboard.

Defines the SQLAlchemy ORM tables backing the SQL repositories.  Columns
use snake_case; conversion to the domain entities happens in
:mod:`task_dashboard.repositories`.

Key Concepts Demonstrated:
- Declarative models with explicit length constraints
- Unique, indexed email column as the real guarantee against duplicates
- Owner foreign key with ``ON DELETE CASCADE`` plus an ORM cascade
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from . import db
from .entities import TaskPriority, TaskStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(db.Model):
    """
    Stored user account.

    Attributes:
        id: UUID string primary key.
        email: Normalised (trimmed, lowercase) address, unique.
        name: Display name.
        password_hash: Werkzeug hash string.
        created_at: Account creation time (UTC).
    """

    __tablename__ = "users"

    id: str = db.Column(db.String(36), primary_key=True)
    # Unique index closes the register race: two concurrent inserts of the
    # same address cannot both commit.
    email: str = db.Column(db.String(255), unique=True, nullable=False, index=True)
    name: str = db.Column(db.String(255), nullable=False)
    password_hash: str = db.Column(db.String(255), nullable=False)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    tasks = db.relationship(
        "TaskRecord",
        backref="owner",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<UserRecord {self.id}: {self.email}>"


class TaskRecord(db.Model):
    """Stored task row, scoped to its owner by ``user_id``."""

    __tablename__ = "tasks"

    id: str = db.Column(db.String(36), primary_key=True)
    user_id: str = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: str = db.Column(db.String(500), nullable=False)
    description: str = db.Column(db.Text, nullable=False, default="")
    status: str = db.Column(db.String(20), nullable=False, default=TaskStatus.TODO.value, index=True)
    priority: str = db.Column(
        db.String(20), nullable=False, default=TaskPriority.MEDIUM.value, index=True
    )
    due_date: date | None = db.Column(db.Date, nullable=True)
    created_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: datetime = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return f"<TaskRecord {self.id}: {self.title}>"
