from __future__ import annotations

"""
🛡️ Reelbase — Role
==================

Named authorization role (`user`, `admin`, ...). Every `User` points at one.
The `user` role is created on demand by the signup flow.
"""

from sqlalchemy import CheckConstraint, Column, String
from sqlalchemy.orm import relationship

from app.db.base_class import Base, UUIDPKMixin


class Role(UUIDPKMixin, Base):
    __tablename__ = "roles"

    name = Column(String(32), nullable=False, unique=True, doc="Stable role key, e.g. 'user'.")

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="name_not_blank"),
    )

    users = relationship("User", back_populates="role", lazy="select", passive_deletes=True)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Role name={self.name!r}>"
