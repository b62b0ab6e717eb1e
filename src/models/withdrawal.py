from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from .base import Base, utcnow
from .enums import WithdrawalStatus


class WithdrawalModel(Base):
    __tablename__ = "withdrawals"

    id = Column(Integer, primary_key=True, index=True)
    designer_id = Column(
        Integer,
        ForeignKey("designers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    status = Column(
        Enum(WithdrawalStatus, native_enum=False),
        nullable=False,
        default=WithdrawalStatus.PENDING,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    # Set when an admin approves or rejects the request
    processed_at = Column(DateTime(timezone=True), nullable=True)

    designer = relationship("DesignerModel", back_populates="withdrawals")
