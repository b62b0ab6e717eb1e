"""Admin console schema definitions."""

from datetime import datetime
from typing import List, Literal, Optional

from models.enums import TransactionStatus, WithdrawalStatus
from schemas.common import CamelModel


class PendingWithdrawals(CamelModel):
    amount: float
    count: int


class MonthlyUsers(CamelModel):
    month: str
    users: int


class MonthlySales(CamelModel):
    month: str
    sales: float


class DashboardStats(CamelModel):
    total_users: int
    total_designers: int
    total_buyers: int
    total_designs: int
    approved_designs: int
    pending_designs: int
    rejected_designs: int
    flagged_designs: int
    total_revenue: float
    total_transactions: int
    pending_withdrawals: PendingWithdrawals
    monthly_users: List[MonthlyUsers]
    monthly_sales: List[MonthlySales]


class PartyBrief(CamelModel):
    id: int
    name: str
    email: str


class DesignBrief(CamelModel):
    id: int
    title: str
    price: float


class TransactionRecord(CamelModel):
    id: int
    buyer_id: int
    design_id: int
    amount: float
    status: TransactionStatus
    payment_method: Optional[str] = None
    created_at: datetime


class AdminTransaction(TransactionRecord):
    buyer: PartyBrief
    design: DesignBrief


class AdminTransactionDetail(AdminTransaction):
    designer: PartyBrief


class RefundRequest(CamelModel):
    reason: Optional[str] = None


class WithdrawalRecord(CamelModel):
    id: int
    designer_id: int
    amount: float
    status: WithdrawalStatus
    created_at: datetime
    processed_at: Optional[datetime] = None


class AdminWithdrawal(WithdrawalRecord):
    designer: PartyBrief


class ProcessWithdrawalRequest(CamelModel):
    status: Literal["APPROVED", "REJECTED"]
    reason: Optional[str] = None
