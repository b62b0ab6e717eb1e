"""Design database model.

A design is a sellable asset owned by exactly one designer. Only APPROVED
designs are visible through the public endpoints.
"""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .base import Base, utcnow
from .enums import DesignStatus


class DesignModel(Base):
    """Design database model."""

    __tablename__ = "designs"

    id = Column(Integer, primary_key=True, index=True)
    designer_id = Column(
        Integer,
        ForeignKey("designers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, index=True)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    file_url = Column(String, nullable=False)
    watermarked_preview_url = Column(String, nullable=False)
    status = Column(
        Enum(DesignStatus, native_enum=False),
        nullable=False,
        default=DesignStatus.PENDING,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    designer = relationship("DesignerModel", back_populates="designs")
    transactions = relationship(
        "TransactionModel",
        back_populates="design",
        cascade="all, delete-orphan",
    )
