"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from paygig.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
        CheckConstraint("bonus_balance >= 0", name="ck_accounts_bonus_balance_non_negative"),
    )

    # Subject issued by the identity provider.
    id = Column(String(64), primary_key=True)
    email = Column(String(255), index=True)
    phone = Column(String(32))
    referral_code = Column(String(16), unique=True, nullable=False)
    referred_by = Column(String(16))
    balance = Column(Integer, nullable=False, default=0)
    bonus_balance = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        Index("ix_transactions_pending_lookup", "account_id", "kind", "status", "amount"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    account_id = Column(String(64), ForeignKey("accounts.id"), nullable=False, index=True)
    kind = Column(String(20), nullable=False)  # deposit, purchase
    amount = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, success, failed
    voucher_code = Column(String(32), unique=True)
    plan_id = Column(String(50))
    description = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)
    resolved_at = Column(DateTime(timezone=True))

    account = relationship("Account", back_populates="transactions")


class AppSetting(Base):
    __tablename__ = "app_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(20), nullable=False, index=True)  # login, signup
    account_id = Column(String(64), ForeignKey("accounts.id"), nullable=True)
    user_email = Column(String(255))
    details = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)
