"""
ShiftSync - Leave Router

API endpoints for leave requests.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_current_user, get_record_store, require_permission
from app.models.leave import LeaveStatus
from app.models.user import Permission, SystemUser
from app.schemas.leave import LeaveRequestCreate, LeaveRequestResponse, LeaveStatusUpdate
from app.services.leave_service import LeaveService
from app.services.record_store import RecordStore


router = APIRouter()


@router.post(
    "",
    response_model=LeaveRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a leave request",
)
async def submit_leave(
    data: LeaveRequestCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(get_current_user),
):
    return await LeaveService(store).submit(
        data.employee_id,
        data.leave_type,
        data.start_date,
        data.end_date,
        data.reason,
        actor=current_user.username,
    )


@router.get(
    "",
    response_model=List[LeaveRequestResponse],
    summary="List leave requests",
    description="Newest first.",
)
async def list_leaves(
    status_filter: Optional[LeaveStatus] = Query(None, alias="status"),
    employee_id: Optional[uuid.UUID] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(get_current_user),
):
    return await LeaveService(store).list_leave_requests(status=status_filter, employee_id=employee_id)


@router.get(
    "/{request_id}",
    response_model=LeaveRequestResponse,
    summary="Get a leave request",
)
async def get_leave(
    request_id: uuid.UUID,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(get_current_user),
):
    return await LeaveService(store).get_leave_request(request_id)


@router.put(
    "/{request_id}/status",
    response_model=LeaveRequestResponse,
    summary="Approve or reject a leave request",
    description="Approval marks every day of the range and, for AL/SL, deducts the leave balance.",
)
async def set_leave_status(
    request_id: uuid.UUID,
    data: LeaveStatusUpdate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_LEAVES)),
):
    return await LeaveService(store).set_status(request_id, data.status, actor=current_user.username)
