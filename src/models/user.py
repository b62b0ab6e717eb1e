"""User database model.

This module defines the User database model using SQLAlchemy. A user owns at
most one role profile: a Designer profile for DESIGNER accounts or a Buyer
profile for BUYER accounts.
"""

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow
from .enums import Role, UserStatus


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    password_hash = Column(String, nullable=False)
    # Set at registration; no endpoint changes it
    role = Column(Enum(Role, native_enum=False), nullable=False)
    status = Column(
        Enum(UserStatus, native_enum=False),
        nullable=False,
        default=UserStatus.ACTIVE,
    )
    verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    designer = relationship(
        "DesignerModel",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    buyer = relationship(
        "BuyerModel",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
