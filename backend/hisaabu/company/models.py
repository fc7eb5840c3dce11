from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from hisaabu.db.base import Base

COMPANY_STATUSES = ("pending", "approved", "rejected", "suspended")
COMPANY_PLANS = ("starter", "pro")


class Company(Base):
    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)          # e.g. co_3f9a...
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    website: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    gst_tin_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    default_currency_code: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")

    header_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    footer_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_invoice_terms: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_quotation_terms: Mapped[str | None] = mapped_column(Text, nullable=True)

    address: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    social_links: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    bank_accounts: Mapped[list | None] = mapped_column(JSON, nullable=True)

    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending", index=True)
    plan: Mapped[str] = mapped_column(String(32), nullable=False, default="starter")
    # set only while status == "approved"
    approved_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    approved_by_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("platform_admins.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )


class Sequence(Base):
    """Per-company document numbering."""

    __tablename__ = "sequences"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    company_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    invoice_prefix: Mapped[str] = mapped_column(String(16), nullable=False, default="INV")
    quotation_prefix: Mapped[str] = mapped_column(String(16), nullable=False, default="QT")
    next_invoice_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    next_quotation_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
