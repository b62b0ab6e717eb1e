"""Admin console utilities: dashboard statistics, transactions, withdrawals."""

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

import pytz
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from core.exceptions import NotFoundError
from models import (
    BuyerModel,
    DesignerModel,
    DesignModel,
    DesignStatus,
    ReportStatus,
    ReportType,
    TransactionModel,
    TransactionStatus,
    UserModel,
    WithdrawalModel,
    WithdrawalStatus,
)
from models.base import utcnow
from schemas.admin import DashboardStats, MonthlySales, MonthlyUsers, PendingWithdrawals
from schemas.common import Pagination
from utils.pagination import PageParams, paginate, total_pages
from utils.transitions import check_transaction_transition, check_withdrawal_transition

logger = logging.getLogger(__name__)

STATS_MONTHS = 6


def _month_starts(now: datetime, months: int) -> List[datetime]:
    """First instant of each of the last ``months`` months, oldest first."""
    year, month = now.year, now.month
    starts = []
    for _ in range(months):
        starts.append(datetime(year, month, 1, tzinfo=pytz.utc))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


def _month_key(value: datetime) -> Tuple[int, int]:
    return value.year, value.month


class AdminManager:
    """Read models and status transitions behind the admin console."""

    def __init__(self, db: Session):
        self.db = db

    def stats(self, now: Optional[datetime] = None) -> DashboardStats:
        """Aggregate dashboard counts and sums.

        Monthly series cover the current month and the five before it and are
        grouped in Python so the query stays portable across databases.

        Args:
            now: Reference time, defaults to the current UTC time.

        Returns:
            DashboardStats.
        """
        now = now or utcnow()

        by_status: Dict[DesignStatus, int] = dict(
            self.db.query(DesignModel.status, func.count(DesignModel.id))
            .group_by(DesignModel.status)
            .all()
        )

        revenue = (
            self.db.query(func.coalesce(func.sum(TransactionModel.amount), 0))
            .filter(TransactionModel.status == TransactionStatus.COMPLETED)
            .scalar()
        )
        pending_amount, pending_count = (
            self.db.query(
                func.coalesce(func.sum(WithdrawalModel.amount), 0),
                func.count(WithdrawalModel.id),
            )
            .filter(WithdrawalModel.status == WithdrawalStatus.PENDING)
            .one()
        )

        months = _month_starts(now, STATS_MONTHS)
        since = months[0]
        users_per_month: Dict[Tuple[int, int], int] = {_month_key(m): 0 for m in months}
        for (created_at,) in self.db.query(UserModel.created_at).filter(
            UserModel.created_at >= since
        ):
            key = _month_key(created_at)
            if key in users_per_month:
                users_per_month[key] += 1

        sales_per_month: Dict[Tuple[int, int], float] = {_month_key(m): 0.0 for m in months}
        for created_at, amount in self.db.query(
            TransactionModel.created_at, TransactionModel.amount
        ).filter(
            TransactionModel.created_at >= since,
            TransactionModel.status == TransactionStatus.COMPLETED,
        ):
            key = _month_key(created_at)
            if key in sales_per_month:
                sales_per_month[key] += float(amount)

        return DashboardStats(
            total_users=self.db.query(func.count(UserModel.id)).scalar(),
            total_designers=self.db.query(func.count(DesignerModel.id)).scalar(),
            total_buyers=self.db.query(func.count(BuyerModel.id)).scalar(),
            total_designs=self.db.query(func.count(DesignModel.id)).scalar(),
            approved_designs=by_status.get(DesignStatus.APPROVED, 0),
            pending_designs=by_status.get(DesignStatus.PENDING, 0),
            rejected_designs=by_status.get(DesignStatus.REJECTED, 0),
            flagged_designs=by_status.get(DesignStatus.FLAGGED, 0),
            total_revenue=float(revenue),
            total_transactions=self.db.query(func.count(TransactionModel.id)).scalar(),
            pending_withdrawals=PendingWithdrawals(
                amount=float(pending_amount), count=pending_count
            ),
            monthly_users=[
                MonthlyUsers(month=m.strftime("%b"), users=users_per_month[_month_key(m)])
                for m in months
            ],
            monthly_sales=[
                MonthlySales(month=m.strftime("%b"), sales=sales_per_month[_month_key(m)])
                for m in months
            ],
        )

    def _transaction_query(self):
        return self.db.query(TransactionModel).options(
            selectinload(TransactionModel.buyer).selectinload(BuyerModel.user),
            selectinload(TransactionModel.design)
            .selectinload(DesignModel.designer)
            .selectinload(DesignerModel.user),
        )

    def list_transactions(
        self, params: PageParams, status: Optional[TransactionStatus] = None
    ) -> Tuple[List[TransactionModel], Pagination]:
        query = self._transaction_query()
        if status:
            query = query.filter(TransactionModel.status == status)
        query = query.order_by(TransactionModel.created_at.desc(), TransactionModel.id.desc())
        return paginate(query, params)

    def get_transaction(self, transaction_id: int) -> TransactionModel:
        transaction = (
            self._transaction_query()
            .filter(TransactionModel.id == transaction_id)
            .first()
        )
        if transaction is None:
            raise NotFoundError("Transaction not found")
        return transaction

    def refund(self, transaction_id: int, reason: Optional[str] = None) -> TransactionModel:
        """Mark a transaction as refunded.

        The payment gateway is not called; only the status changes.

        Raises:
            NotFoundError: If the transaction does not exist.
            ConflictError: If it was already refunded.
        """
        transaction = self.get_transaction(transaction_id)
        check_transaction_transition(transaction.status, TransactionStatus.REFUNDED)
        transaction.status = TransactionStatus.REFUNDED
        self.db.commit()
        self.db.refresh(transaction)
        logger.info("Transaction %s refunded (reason: %s)", transaction_id, reason or "-")
        return transaction

    def _withdrawal_query(self):
        return self.db.query(WithdrawalModel).options(
            selectinload(WithdrawalModel.designer).selectinload(DesignerModel.user)
        )

    def list_withdrawals(
        self, params: PageParams, status: Optional[WithdrawalStatus] = None
    ) -> Tuple[List[WithdrawalModel], Pagination]:
        query = self._withdrawal_query()
        if status:
            query = query.filter(WithdrawalModel.status == status)
        query = query.order_by(WithdrawalModel.created_at.desc(), WithdrawalModel.id.desc())
        return paginate(query, params)

    def get_withdrawal(self, withdrawal_id: int) -> WithdrawalModel:
        withdrawal = (
            self._withdrawal_query().filter(WithdrawalModel.id == withdrawal_id).first()
        )
        if withdrawal is None:
            raise NotFoundError("Withdrawal not found")
        return withdrawal

    def process_withdrawal(
        self,
        withdrawal_id: int,
        status: WithdrawalStatus,
        reason: Optional[str] = None,
    ) -> WithdrawalModel:
        """Approve or reject a pending withdrawal and stamp ``processed_at``.

        Raises:
            NotFoundError: If the withdrawal does not exist.
            ConflictError: If it is no longer pending.
        """
        withdrawal = self.get_withdrawal(withdrawal_id)
        check_withdrawal_transition(withdrawal.status, status)
        withdrawal.status = status
        withdrawal.processed_at = utcnow()
        self.db.commit()
        self.db.refresh(withdrawal)
        logger.info(
            "Withdrawal %s %s (reason: %s)",
            withdrawal_id,
            status.value.lower(),
            reason or "-",
        )
        return withdrawal

    def list_reports(
        self,
        params: PageParams,
        report_type: Optional[ReportType] = None,
        status: Optional[ReportStatus] = None,
    ) -> Tuple[List[dict], Pagination]:
        """List user reports.

        There is no reports table yet, so every page is empty.
        """
        total = 0
        return [], Pagination(
            page=params.page,
            limit=params.limit,
            total=total,
            total_pages=total_pages(total, params.limit),
        )
