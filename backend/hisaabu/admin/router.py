from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hisaabu.admin import service
from hisaabu.admin.schemas import (
    CompanyAdminDetail,
    CompanyAdminOut,
    CompanyPage,
    CompanyPlanUpdate,
    CompanyStatusUpdate,
)
from hisaabu.auth.deps import PLATFORM_ADMIN_GATES, current_identity
from hisaabu.auth.tokens import AccessClaims
from hisaabu.core.schemas import ApiResponse
from hisaabu.db.session import get_db

router = APIRouter(dependencies=PLATFORM_ADMIN_GATES)


@router.get("", response_model=ApiResponse[CompanyPage])
def list_companies(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    result = service.list_companies(db, page=page, limit=limit)
    result["data"] = [CompanyAdminOut.model_validate(row) for row in result["data"]]
    return ApiResponse(data=CompanyPage(**result))


@router.get("/{company_id}", response_model=ApiResponse[CompanyAdminDetail])
def get_company(company_id: str, db: Session = Depends(get_db)):
    company = service.get_company_detail(db, company_id)
    return ApiResponse(data=CompanyAdminDetail.model_validate(company))


@router.put("/{company_id}/status", response_model=ApiResponse[CompanyAdminOut])
def update_status(
    company_id: str,
    payload: CompanyStatusUpdate,
    db: Session = Depends(get_db),
    identity: AccessClaims = Depends(current_identity),
):
    company = service.update_company_status(db, company_id, payload.status, identity.user_id)
    return ApiResponse(data=CompanyAdminOut.model_validate(company))


@router.put("/{company_id}/plan", response_model=ApiResponse[CompanyAdminOut])
def update_plan(
    company_id: str,
    payload: CompanyPlanUpdate,
    db: Session = Depends(get_db),
):
    company = service.update_company_plan(db, company_id, payload.plan)
    return ApiResponse(data=CompanyAdminOut.model_validate(company))
