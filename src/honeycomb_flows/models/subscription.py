"""Trigger subscription and delivery models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from honeycomb_flows.utils.db import Base


def _utcnow() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def _uuid() -> str:
    """Generate a new UUID hex string."""
    return uuid.uuid4().hex


class TriggerSubscription(Base):
    """Subscriber to trigger events. A null trigger_id matches every trigger."""

    __tablename__ = "trigger_subscriptions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    trigger_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)


class TriggerDelivery(Base):
    """Message delivered to a subscription when a matching trigger fires."""

    __tablename__ = "trigger_deliveries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    subscription_id: Mapped[str] = mapped_column(String(36), index=True)
    body: Mapped[str] = mapped_column(Text)  # JSON message
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
