"""Admin console routes.

Every route in this module sits behind ``require_admin``, applied once on the
router: a request without a valid ADMIN token never reaches a handler.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.routes.auth import require_admin
from core.dependencies import AdminManagerDep, DesignManagerDep, UserManagerDep
from models import (
    DesignModel,
    DesignStatus,
    ReportStatus,
    ReportType,
    Role,
    TransactionModel,
    TransactionStatus,
    UserStatus,
    WithdrawalModel,
    WithdrawalStatus,
)
from schemas.admin import (
    AdminTransaction,
    AdminTransactionDetail,
    AdminWithdrawal,
    DesignBrief,
    PartyBrief,
    ProcessWithdrawalRequest,
    RefundRequest,
)
from schemas.design import AdminDesign, DesignOwner, DesignRecord, ModerateDesignRequest
from schemas.user import AdminUserDetail, AdminUserSummary, UpdateUserStatusRequest
from utils.pagination import PageParams

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


def _page(key: str, items: list, pagination) -> dict:
    return {
        "success": True,
        "data": {key: items, "pagination": pagination.dump()},
    }


def _build_admin_design(model: DesignModel) -> AdminDesign:
    record = DesignRecord.model_validate(model)
    return AdminDesign(
        **record.model_dump(),
        designer=DesignOwner(
            id=model.designer.id,
            name=model.designer.user.name,
            email=model.designer.user.email,
        ),
    )


def _build_transaction(model: TransactionModel) -> AdminTransaction:
    return AdminTransaction(
        id=model.id,
        buyer_id=model.buyer_id,
        design_id=model.design_id,
        amount=model.amount,
        status=model.status,
        payment_method=model.payment_method,
        created_at=model.created_at,
        buyer=PartyBrief(
            id=model.buyer.id,
            name=model.buyer.user.name,
            email=model.buyer.user.email,
        ),
        design=DesignBrief(
            id=model.design.id,
            title=model.design.title,
            price=model.design.price,
        ),
    )


def _build_transaction_detail(model: TransactionModel) -> AdminTransactionDetail:
    designer = model.design.designer
    return AdminTransactionDetail(
        **_build_transaction(model).model_dump(),
        designer=PartyBrief(id=designer.id, name=designer.user.name, email=designer.user.email),
    )


def _build_withdrawal(model: WithdrawalModel) -> AdminWithdrawal:
    return AdminWithdrawal(
        id=model.id,
        designer_id=model.designer_id,
        amount=model.amount,
        status=model.status,
        created_at=model.created_at,
        processed_at=model.processed_at,
        designer=PartyBrief(
            id=model.designer.id,
            name=model.designer.user.name,
            email=model.designer.user.email,
        ),
    )


# --- Dashboard ---


@router.get("/stats", summary="Dashboard statistics")
def get_stats(admin_manager: AdminManagerDep) -> dict:
    """Aggregate counts and sums for the admin dashboard.

    Returns:
        Dictionary with totals, design counts per status, revenue, pending
        withdrawals and six-month user/sales series.
    """
    return {"success": True, "data": admin_manager.stats().dump()}


# --- Users ---


@router.get("/users", summary="List users")
def list_users(
    user_manager: UserManagerDep,
    params: PageParams = Depends(),
    role: Optional[Role] = Query(None),
    status: Optional[UserStatus] = Query(None),
    search: Optional[str] = Query(None),
) -> dict:
    """List users with filters and pagination.

    Args:
        user_manager: Injected UserManager instance.
        params: Page parameters.
        role: Exact role filter.
        status: Exact status filter.
        search: Substring over name and email, case-insensitive.

    Returns:
        Dictionary with ``data.users`` and ``data.pagination``.
    """
    users, pagination = user_manager.list_users(
        params, role=role, status=status, search=search.strip() if search else None
    )
    return _page("users", [AdminUserSummary.model_validate(u).dump() for u in users], pagination)


@router.get("/users/{user_id}", summary="Get user details")
def get_user(user_id: int, user_manager: UserManagerDep) -> dict:
    user = user_manager.get_user(user_id)
    return {"success": True, "data": AdminUserDetail.model_validate(user).dump()}


@router.put("/users/{user_id}/status", summary="Update user status")
def update_user_status(
    user_id: int,
    req: UpdateUserStatusRequest,
    user_manager: UserManagerDep,
) -> dict:
    new_status = UserStatus(req.status)
    user = user_manager.update_status(user_id, new_status, reason=req.reason)
    return {
        "success": True,
        "message": f"User status updated to {new_status.value}",
        "data": AdminUserDetail.model_validate(user).dump(),
    }


@router.delete("/users/{user_id}", summary="Delete user")
def delete_user(user_id: int, user_manager: UserManagerDep) -> dict:
    user_manager.delete_user(user_id)
    return {"success": True, "message": "User deleted successfully"}


# --- Designs ---


@router.get("/designs", summary="List designs")
def list_designs(
    design_manager: DesignManagerDep,
    params: PageParams = Depends(),
    status: Optional[DesignStatus] = Query(None),
    category: Optional[str] = Query(None),
    designer_id: Optional[int] = Query(None, alias="designerId"),
) -> dict:
    """List designs of every status with filters and pagination.

    Args:
        design_manager: Injected DesignManager instance.
        params: Page parameters.
        status: Exact status filter.
        category: Exact category filter.
        designer_id: Owning designer profile id.

    Returns:
        Dictionary with ``data.designs`` and ``data.pagination``.
    """
    designs, pagination = design_manager.list_admin(
        params,
        status=status,
        category=category.strip() if category else None,
        designer_id=designer_id,
    )
    return _page("designs", [_build_admin_design(d).dump() for d in designs], pagination)


@router.get("/designs/{design_id}", summary="Get design details")
def get_design(design_id: int, design_manager: DesignManagerDep) -> dict:
    design = design_manager.get(design_id)
    return {"success": True, "data": _build_admin_design(design).dump()}


@router.put("/designs/{design_id}/moderate", summary="Moderate design")
def moderate_design(
    design_id: int,
    req: ModerateDesignRequest,
    design_manager: DesignManagerDep,
) -> dict:
    """Set a design's review status to APPROVED, REJECTED or FLAGGED.

    Args:
        design_id: Design to moderate.
        req: Target status and optional reason.
        design_manager: Injected DesignManager instance.

    Returns:
        Dictionary with a message and the updated design.
    """
    target = DesignStatus(req.status)
    design = design_manager.moderate(design_id, target, reason=req.reason)
    return {
        "success": True,
        "message": f"Design {target.value.lower()}",
        "data": _build_admin_design(design).dump(),
    }


@router.delete("/designs/{design_id}", summary="Delete design")
def delete_design(design_id: int, design_manager: DesignManagerDep) -> dict:
    design_manager.delete_any(design_id)
    return {"success": True, "message": "Design deleted successfully"}


# --- Transactions ---


@router.get("/transactions", summary="List transactions")
def list_transactions(
    admin_manager: AdminManagerDep,
    params: PageParams = Depends(),
    status: Optional[TransactionStatus] = Query(None),
) -> dict:
    transactions, pagination = admin_manager.list_transactions(params, status=status)
    return _page(
        "transactions",
        [_build_transaction(t).dump() for t in transactions],
        pagination,
    )


@router.get("/transactions/{transaction_id}", summary="Get transaction details")
def get_transaction(transaction_id: int, admin_manager: AdminManagerDep) -> dict:
    transaction = admin_manager.get_transaction(transaction_id)
    return {"success": True, "data": _build_transaction_detail(transaction).dump()}


@router.put("/transactions/{transaction_id}/refund", summary="Refund transaction")
def refund_transaction(
    transaction_id: int,
    admin_manager: AdminManagerDep,
    req: Optional[RefundRequest] = None,
) -> dict:
    """Mark a transaction REFUNDED.

    No money moves: the payment gateway is not integrated.
    """
    reason = req.reason if req else None
    transaction = admin_manager.refund(transaction_id, reason=reason)
    return {
        "success": True,
        "message": "Refund processed successfully",
        "data": _build_transaction(transaction).dump(),
    }


# --- Withdrawals ---


@router.get("/withdrawals", summary="List withdrawals")
def list_withdrawals(
    admin_manager: AdminManagerDep,
    params: PageParams = Depends(),
    status: Optional[WithdrawalStatus] = Query(None),
) -> dict:
    withdrawals, pagination = admin_manager.list_withdrawals(params, status=status)
    return _page(
        "withdrawals",
        [_build_withdrawal(w).dump() for w in withdrawals],
        pagination,
    )


@router.put("/withdrawals/{withdrawal_id}/process", summary="Process withdrawal")
def process_withdrawal(
    withdrawal_id: int,
    req: ProcessWithdrawalRequest,
    admin_manager: AdminManagerDep,
) -> dict:
    """Approve or reject a pending withdrawal.

    Args:
        withdrawal_id: Withdrawal to process.
        req: APPROVED or REJECTED, with an optional reason.
        admin_manager: Injected AdminManager instance.

    Returns:
        Dictionary with a message and the updated withdrawal.

    Raises:
        ConflictError: If the withdrawal was already processed.
    """
    target = WithdrawalStatus(req.status)
    withdrawal = admin_manager.process_withdrawal(withdrawal_id, target, reason=req.reason)
    return {
        "success": True,
        "message": f"Withdrawal {target.value.lower()}",
        "data": _build_withdrawal(withdrawal).dump(),
    }


# --- Reports ---


@router.get("/reports", summary="List reports")
def list_reports(
    admin_manager: AdminManagerDep,
    params: PageParams = Depends(),
    report_type: Optional[ReportType] = Query(None, alias="type"),
    status: Optional[ReportStatus] = Query(None),
) -> dict:
    reports, pagination = admin_manager.list_reports(
        params, report_type=report_type, status=status
    )
    return _page("reports", reports, pagination)
