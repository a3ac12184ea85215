"""
ShiftSync - Settings Router

API endpoints for public holidays, the company list and the About page.
"""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from app.dependencies import get_current_user, get_record_store, require_permission
from app.models.user import Permission, SystemUser
from app.schemas.organization import (
    AboutProfileSchema,
    AboutProfileUpdate,
    CompanyCreate,
    CompanyListResponse,
    CompanyRename,
    HolidayCreate,
    HolidayResponse,
)
from app.services.organization_service import AboutService, CompanyService, HolidayService
from app.services.record_store import RecordStore


router = APIRouter()


# ===========================================
# PUBLIC HOLIDAYS
# ===========================================

@router.get(
    "/holidays",
    response_model=List[HolidayResponse],
    summary="List public holidays",
)
async def list_holidays(
    year: Optional[int] = Query(None),
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(get_current_user),
):
    return await HolidayService(store).list_holidays(year)


@router.post(
    "/holidays",
    response_model=HolidayResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a public holiday",
    description="Also marks the date as Public Holiday for every active employee.",
)
async def add_holiday(
    data: HolidayCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_SETTINGS)),
):
    return await HolidayService(store).add_holiday(data.date, data.name, actor=current_user.username)


@router.delete(
    "/holidays/{holiday_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a public holiday",
    description="Attendance already stamped for the date is not reverted.",
)
async def delete_holiday(
    holiday_id: uuid.UUID,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_SETTINGS)),
):
    await HolidayService(store).delete_holiday(holiday_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ===========================================
# COMPANIES
# ===========================================

@router.get(
    "/companies",
    response_model=CompanyListResponse,
    summary="List companies",
)
async def list_companies(
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(get_current_user),
):
    return CompanyListResponse(companies=await CompanyService(store).list_companies())


@router.post(
    "/companies",
    response_model=CompanyListResponse,
    summary="Add a company",
)
async def add_company(
    data: CompanyCreate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_SETTINGS)),
):
    return CompanyListResponse(companies=await CompanyService(store).add_company(data.name))


@router.put(
    "/companies/{name}",
    response_model=CompanyListResponse,
    summary="Rename a company",
    description="Employee records keep the old name unless cascade is true.",
)
async def rename_company(
    name: str,
    data: CompanyRename,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_SETTINGS)),
):
    companies = await CompanyService(store).rename_company(name, data.new_name, cascade=data.cascade)
    return CompanyListResponse(companies=companies)


@router.delete(
    "/companies/{name}",
    response_model=CompanyListResponse,
    summary="Delete a company",
)
async def delete_company(
    name: str,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_SETTINGS)),
):
    return CompanyListResponse(companies=await CompanyService(store).delete_company(name))


# ===========================================
# ABOUT
# ===========================================

@router.get(
    "/about",
    response_model=AboutProfileSchema,
    summary="About page",
)
async def get_about(store: RecordStore = Depends(get_record_store)):
    return await AboutService(store).get_about()


@router.put(
    "/about",
    response_model=AboutProfileSchema,
    summary="Update the About page",
)
async def update_about(
    data: AboutProfileUpdate,
    store: RecordStore = Depends(get_record_store),
    current_user: SystemUser = Depends(require_permission(Permission.MANAGE_SETTINGS)),
):
    return await AboutService(store).update_about(data.model_dump(exclude_unset=True))
