"""
ShiftSync - Employee Router

API endpoints for the employee directory, offboarding, rehire and the
employee CSV import.
"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_record_store, require_permission
from app.models.employee import EmployeeStatus, Team
from app.models.user import Permission, SystemUser
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    ExpiringDocumentResponse,
    ImportRequest,
    ImportResponse,
    OffboardRequest,
    RehireRequest,
)
from app.services.bulk_import_service import BulkImportService
from app.services.employee_service import EmployeeService
from app.services.offboarding_service import OffboardingService
from app.services.record_store import RecordStore


router = APIRouter()


# ===========================================
# DIRECTORY
# ===========================================

@router.get(
    "",
    response_model=List[EmployeeResponse],
    summary="List employees",
)
async def list_employees(
    company: Optional[str] = Query(None),
    team: Optional[Team] = Query(None),
    status_filter: Optional[EmployeeStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, description="Matches name, code or designation"),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_DIRECTORY)),
):
    return await EmployeeService(store).list_employees(
        company=company, team=team, status=status_filter, search=search,
    )


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Onboard an employee",
)
async def create_employee(
    data: EmployeeCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_EMPLOYEES)),
):
    return await EmployeeService(store).create_employee(data.model_dump())


@router.get(
    "/documents/expiring",
    response_model=List[ExpiringDocumentResponse],
    summary="Expired or expiring identity documents",
)
async def list_expiring_documents(
    today: Optional[date] = Query(None, description="Reference date, defaults to today"),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_DIRECTORY)),
):
    return await EmployeeService(store).list_expiring_documents(today)


@router.post(
    "/import",
    response_model=ImportResponse,
    summary="Import employees from CSV",
    description="23-column employee CSV; rows matching an existing code update that employee.",
)
async def import_employees(
    data: ImportRequest,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_EMPLOYEES)),
):
    result = await BulkImportService(store).import_employees_csv(data.csv_text)
    return result.to_dict()


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Get an employee",
)
async def get_employee(
    employee_id: uuid.UUID,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.VIEW_DIRECTORY)),
):
    return await EmployeeService(store).get_employee(employee_id)


@router.patch(
    "/{employee_id}",
    response_model=EmployeeResponse,
    summary="Update an employee",
)
async def update_employee(
    employee_id: uuid.UUID,
    data: EmployeeUpdate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_EMPLOYEES)),
):
    return await EmployeeService(store).update_employee(
        employee_id, data.model_dump(exclude_unset=True),
    )


# ===========================================
# OFFBOARDING / REHIRE
# ===========================================

@router.post(
    "/{employee_id}/offboard",
    response_model=EmployeeResponse,
    summary="Offboard an employee",
    description="Marks the employee Inactive and stores exit details; net settlement is recomputed.",
)
async def offboard_employee(
    employee_id: uuid.UUID,
    data: OffboardRequest,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_EMPLOYEES)),
):
    return await OffboardingService(store).offboard(
        employee_id, data.model_dump(), actor=current_user.username,
    )


@router.post(
    "/{employee_id}/rehire",
    response_model=EmployeeResponse,
    summary="Rehire an employee",
    description="Marks the employee Active again; the joining date becomes the rehire date.",
)
async def rehire_employee(
    employee_id: uuid.UUID,
    data: RehireRequest,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_EMPLOYEES)),
):
    return await OffboardingService(store).rehire(employee_id, data.rejoining_date, data.reason)
