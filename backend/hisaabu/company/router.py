from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hisaabu.auth.deps import TENANT_GATES, current_company_id
from hisaabu.auth.rbac import require_role
from hisaabu.company import service
from hisaabu.company.schemas import CompanyProfileOut, CompanyProfileUpdate
from hisaabu.core.schemas import ApiResponse
from hisaabu.db.session import get_db

router = APIRouter(dependencies=TENANT_GATES)


@router.get("/profile", response_model=ApiResponse[CompanyProfileOut])
def get_profile(
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    company = service.get_profile(db, company_id)
    return ApiResponse(data=CompanyProfileOut.model_validate(company))


@router.put(
    "/profile",
    response_model=ApiResponse[CompanyProfileOut],
    dependencies=[Depends(require_role("admin"))],
)
def update_profile(
    payload: CompanyProfileUpdate,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    company = service.update_profile(db, company_id, payload)
    return ApiResponse(data=CompanyProfileOut.model_validate(company))
