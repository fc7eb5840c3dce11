from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hisaabu.auth.deps import TENANT_GATES, current_company_id
from hisaabu.core.schemas import ApiResponse, DeletedOut
from hisaabu.customers import service
from hisaabu.customers.schemas import CustomerCreate, CustomerOut, CustomerUpdate
from hisaabu.db.session import get_db

router = APIRouter(dependencies=TENANT_GATES)


@router.get("", response_model=ApiResponse[list[CustomerOut]])
def list_customers(
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    rows = service.list_customers(db, company_id)
    return ApiResponse(data=[CustomerOut.model_validate(row) for row in rows])


@router.get("/{customer_id}", response_model=ApiResponse[CustomerOut])
def get_customer(
    customer_id: str,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    customer = service.get_customer(db, company_id, customer_id)
    return ApiResponse(data=CustomerOut.model_validate(customer))


@router.post("", status_code=201, response_model=ApiResponse[CustomerOut])
def create_customer(
    payload: CustomerCreate,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    customer = service.create_customer(db, company_id, payload)
    return ApiResponse(data=CustomerOut.model_validate(customer))


@router.put("/{customer_id}", response_model=ApiResponse[CustomerOut])
def update_customer(
    customer_id: str,
    payload: CustomerUpdate,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    customer = service.update_customer(db, company_id, customer_id, payload)
    return ApiResponse(data=CustomerOut.model_validate(customer))


@router.delete("/{customer_id}", response_model=ApiResponse[DeletedOut])
def delete_customer(
    customer_id: str,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    service.delete_customer(db, company_id, customer_id)
    return ApiResponse(data=DeletedOut(id=customer_id))
