"""
ShiftSync - Payroll Router

API endpoints for payslips, monthly payroll summaries and deductions.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import get_record_store, require_permission
from app.models.employee import Team
from app.models.user import Permission, SystemUser
from app.schemas.payroll import (
    DeductionCreate,
    DeductionResponse,
    PayrollSummaryResponse,
    PayslipResponse,
)
from app.services.payroll_service import PayrollService
from app.services.record_store import RecordStore


router = APIRouter()


# ===========================================
# PAYSLIPS
# ===========================================

@router.get(
    "/payslip/{employee_id}",
    response_model=PayslipResponse,
    summary="Employee payslip",
    description="Gross, proration for unpaid days, deductions, overtime/holiday/week-off additions and net pay.",
)
async def get_payslip(
    employee_id: uuid.UUID,
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_PAYROLL)),
):
    return await PayrollService(store).employee_payslip(employee_id, year, month)


@router.get(
    "/summary",
    response_model=PayrollSummaryResponse,
    summary="Monthly payroll summary",
    description="Payslips of all active employees matching the filters, with totals.",
)
async def get_payroll_summary(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    company: Optional[str] = Query(None),
    team: Optional[Team] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_PAYROLL)),
):
    return await PayrollService(store).payroll_summary(year, month, company=company, team=team)


# ===========================================
# DEDUCTIONS
# ===========================================

@router.post(
    "/deductions",
    response_model=DeductionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a deduction",
)
async def add_deduction(
    data: DeductionCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_PAYROLL)),
):
    return await PayrollService(store).add_deduction(
        data.employee_id,
        data.date,
        data.deduction_type,
        data.amount,
        note=data.note,
        actor=current_user.username,
    )


@router.get(
    "/deductions",
    response_model=List[DeductionResponse],
    summary="List deductions",
)
async def list_deductions(
    employee_id: Optional[uuid.UUID] = Query(None),
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_PAYROLL)),
):
    return await PayrollService(store).list_deductions(employee_id, year, month)


@router.delete(
    "/deductions/{deduction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a deduction",
)
async def delete_deduction(
    deduction_id: uuid.UUID,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_PAYROLL)),
):
    await PayrollService(store).delete_deduction(deduction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
