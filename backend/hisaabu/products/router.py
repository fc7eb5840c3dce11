from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hisaabu.auth.deps import TENANT_GATES, current_company_id
from hisaabu.core.schemas import ApiResponse, DeletedOut
from hisaabu.db.session import get_db
from hisaabu.products import service
from hisaabu.products.schemas import ProductCreate, ProductOut, ProductUpdate

router = APIRouter(dependencies=TENANT_GATES)


@router.get("", response_model=ApiResponse[list[ProductOut]])
def list_products(
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    rows = service.list_products(db, company_id)
    return ApiResponse(data=[ProductOut.model_validate(row) for row in rows])


@router.get("/{product_id}", response_model=ApiResponse[ProductOut])
def get_product(
    product_id: str,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    product = service.get_product(db, company_id, product_id)
    return ApiResponse(data=ProductOut.model_validate(product))


@router.post("", status_code=201, response_model=ApiResponse[ProductOut])
def create_product(
    payload: ProductCreate,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    product = service.create_product(db, company_id, payload)
    return ApiResponse(data=ProductOut.model_validate(product))


@router.put("/{product_id}", response_model=ApiResponse[ProductOut])
def update_product(
    product_id: str,
    payload: ProductUpdate,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    product = service.update_product(db, company_id, product_id, payload)
    return ApiResponse(data=ProductOut.model_validate(product))


@router.delete("/{product_id}", response_model=ApiResponse[DeletedOut])
def delete_product(
    product_id: str,
    company_id: str = Depends(current_company_id),
    db: Session = Depends(get_db),
):
    service.delete_product(db, company_id, product_id)
    return ApiResponse(data=DeletedOut(id=product_id))
