"""ORM models. Importing this package registers every table on Base.metadata."""

from .base import Base
from .buyer import BuyerModel
from .design import DesignModel
from .designer import DesignerModel
from .enums import (
    DesignStatus,
    ReportStatus,
    ReportType,
    Role,
    TransactionStatus,
    UserStatus,
    WithdrawalStatus,
)
from .transaction import TransactionModel
from .user import UserModel
from .withdrawal import WithdrawalModel

__all__ = [
    "Base",
    "BuyerModel",
    "DesignModel",
    "DesignerModel",
    "DesignStatus",
    "ReportStatus",
    "ReportType",
    "Role",
    "TransactionModel",
    "TransactionStatus",
    "UserModel",
    "UserStatus",
    "WithdrawalModel",
    "WithdrawalStatus",
]
