from __future__ import annotations

"""
👤 Reelbase — User (account identity)
=====================================

Minimal account model: display name, unique email, bcrypt hash and a role.

Conventions
-----------
• `email` is stored **lower-cased** by the signup flow; uniqueness is enforced
  by the database as well, so concurrent signups cannot both succeed.
• `hashed_password` never leaves the service layer.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from app.db.base_class import Base, TimestampMixin, UUIDPKMixin


class User(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "users"

    # ── Profile ────────────────────────────────────────────────────────────
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    avatar_url = Column(String(2048), nullable=True)

    # ── Auth ───────────────────────────────────────────────────────────────
    hashed_password = Column(String(255), nullable=False)
    role_id = Column(Uuid, ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False, index=True)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("email = lower(email)", name="email_lowercase"),
        CheckConstraint("length(trim(name)) > 0", name="name_not_blank"),
    )

    # ── Relationships ──────────────────────────────────────────────────────
    role = relationship("Role", back_populates="users", lazy="selectin")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id} email={self.email!r}>"
