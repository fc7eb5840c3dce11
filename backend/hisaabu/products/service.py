import secrets
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hisaabu.core.errors import Conflict, NotFound
from hisaabu.products.models import Product
from hisaabu.products.schemas import ProductCreate, ProductUpdate

# Columns a partial update may not null out.
_REQUIRED = {"name", "unit_price", "tax_rate", "is_active"}


def _get_scoped(db: Session, company_id: str, product_id: str) -> Product:
    product = db.execute(
        select(Product).where(
            Product.id == product_id,
            Product.company_id == company_id,
        )
    ).scalar_one_or_none()
    if not product:
        raise NotFound("Product not found")
    return product


def _sku_taken(db: Session, company_id: str, sku: str, exclude_id: str | None = None) -> bool:
    stmt = select(Product.id).where(Product.company_id == company_id, Product.sku == sku)
    if exclude_id:
        stmt = stmt.where(Product.id != exclude_id)
    return db.execute(stmt).first() is not None


def _ensure_sku_free(db: Session, company_id: str, sku: str) -> None:
    if _sku_taken(db, company_id, sku):
        raise Conflict("SKU already exists for this company")


def _commit(db: Session, product: Product) -> None:
    company_id, product_id, sku = product.company_id, product.id, product.sku
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # lost a race with a concurrent write of the same SKU
        if sku and _sku_taken(db, company_id, sku, exclude_id=product_id):
            raise Conflict("SKU already exists for this company") from exc
        raise


def list_products(db: Session, company_id: str) -> list[Product]:
    return list(
        db.execute(
            select(Product)
            .where(Product.company_id == company_id)
            .order_by(Product.created_at.desc())
        ).scalars().all()
    )


def get_product(db: Session, company_id: str, product_id: str) -> Product:
    return _get_scoped(db, company_id, product_id)


def create_product(db: Session, company_id: str, data: ProductCreate) -> Product:
    values = data.model_dump()
    values["sku"] = (values.get("sku") or "").strip() or None
    if values["sku"]:
        _ensure_sku_free(db, company_id, values["sku"])
    if values.get("tax_rate") is None:
        values["tax_rate"] = Decimal("0")

    product = Product(id=f"prd_{secrets.token_hex(12)}", company_id=company_id, **values)
    db.add(product)
    _commit(db, product)
    db.refresh(product)
    return product


def update_product(
    db: Session, company_id: str, product_id: str, data: ProductUpdate
) -> Product:
    product = _get_scoped(db, company_id, product_id)
    changes = data.model_dump(exclude_unset=True)

    if "sku" in changes:
        changes["sku"] = (changes["sku"] or "").strip() or None
        if changes["sku"] and changes["sku"] != product.sku:
            _ensure_sku_free(db, company_id, changes["sku"])

    for field, value in changes.items():
        if value is None and field in _REQUIRED:
            continue
        setattr(product, field, value)

    db.add(product)
    _commit(db, product)
    db.refresh(product)
    return product


def delete_product(db: Session, company_id: str, product_id: str) -> None:
    product = _get_scoped(db, company_id, product_id)
    db.delete(product)
    db.commit()
