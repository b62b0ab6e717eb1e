from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from .base import Base


class DesignerModel(Base):
    __tablename__ = "designers"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    bio = Column(Text, nullable=True)
    portfolio_link = Column(String, nullable=True)
    rating = Column(Numeric(3, 2, asdecimal=False), nullable=False, default=0)
    total_earnings = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)

    user = relationship("UserModel", back_populates="designer")
    designs = relationship(
        "DesignModel",
        back_populates="designer",
        cascade="all, delete-orphan",
    )
    withdrawals = relationship(
        "WithdrawalModel",
        back_populates="designer",
        cascade="all, delete-orphan",
    )
