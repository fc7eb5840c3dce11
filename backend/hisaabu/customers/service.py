import secrets

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hisaabu.core.errors import Conflict, NotFound
from hisaabu.customers.models import Customer
from hisaabu.customers.schemas import CustomerCreate, CustomerUpdate


def _get_scoped(db: Session, company_id: str, customer_id: str) -> Customer:
    customer = db.execute(
        select(Customer).where(
            Customer.id == customer_id,
            Customer.company_id == company_id,
        )
    ).scalar_one_or_none()
    if not customer:
        raise NotFound("Customer not found")
    return customer


def _email_taken(db: Session, company_id: str, email: str, exclude_id: str | None = None) -> bool:
    stmt = select(Customer.id).where(
        Customer.company_id == company_id,
        Customer.email == email,
    )
    if exclude_id:
        stmt = stmt.where(Customer.id != exclude_id)
    return db.execute(stmt).first() is not None


def _ensure_email_free(db: Session, company_id: str, email: str) -> None:
    if _email_taken(db, company_id, email):
        raise Conflict("Email already exists for this company")


def _commit(db: Session, customer: Customer) -> None:
    company_id, customer_id, email = customer.company_id, customer.id, customer.email
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        # lost a race with a concurrent write of the same email
        if email and _email_taken(db, company_id, email, exclude_id=customer_id):
            raise Conflict("Email already exists for this company") from exc
        raise


def list_customers(db: Session, company_id: str) -> list[Customer]:
    return list(
        db.execute(
            select(Customer)
            .where(Customer.company_id == company_id)
            .order_by(Customer.created_at.desc())
        ).scalars().all()
    )


def get_customer(db: Session, company_id: str, customer_id: str) -> Customer:
    return _get_scoped(db, company_id, customer_id)


def create_customer(db: Session, company_id: str, data: CustomerCreate) -> Customer:
    values = data.model_dump(exclude={"address"})
    if values.get("email"):
        values["email"] = str(values["email"]).lower()
        _ensure_email_free(db, company_id, values["email"])

    customer = Customer(
        id=f"cus_{secrets.token_hex(12)}",
        company_id=company_id,
        address=data.address.model_dump(exclude_none=True) if data.address else None,
        **values,
    )
    db.add(customer)
    _commit(db, customer)
    db.refresh(customer)
    return customer


def update_customer(
    db: Session, company_id: str, customer_id: str, data: CustomerUpdate
) -> Customer:
    customer = _get_scoped(db, company_id, customer_id)
    changes = data.model_dump(exclude_unset=True, exclude={"address"})

    if changes.get("email"):
        changes["email"] = str(changes["email"]).lower()
        if changes["email"] != customer.email:
            _ensure_email_free(db, company_id, changes["email"])

    # address is only replaced when the caller sent one
    if "address" in data.model_fields_set:
        customer.address = data.address.model_dump(exclude_none=True) if data.address else None

    for field, value in changes.items():
        if value is None and field in {"name", "is_active"}:
            continue
        setattr(customer, field, value)

    db.add(customer)
    _commit(db, customer)
    db.refresh(customer)
    return customer


def delete_customer(db: Session, company_id: str, customer_id: str) -> None:
    customer = _get_scoped(db, company_id, customer_id)
    db.delete(customer)
    db.commit()
