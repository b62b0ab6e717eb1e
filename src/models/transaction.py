from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow
from .enums import TransactionStatus


class TransactionModel(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    buyer_id = Column(
        Integer,
        ForeignKey("buyers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    design_id = Column(
        Integer,
        ForeignKey("designs.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    status = Column(
        Enum(TransactionStatus, native_enum=False),
        nullable=False,
        default=TransactionStatus.PENDING,
        index=True,
    )
    payment_method = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    buyer = relationship("BuyerModel", back_populates="transactions")
    design = relationship("DesignModel", back_populates="transactions")
