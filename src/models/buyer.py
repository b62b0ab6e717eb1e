from sqlalchemy import Column, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship

from .base import Base


class BuyerModel(Base):
    __tablename__ = "buyers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    total_spent = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)

    user = relationship("UserModel", back_populates="buyer")
    transactions = relationship(
        "TransactionModel",
        back_populates="buyer",
        cascade="all, delete-orphan",
    )
