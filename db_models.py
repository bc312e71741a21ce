"""
ORM model for stored price observations.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class PriceObservation(Base):
    __tablename__ = "price_observations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    instrument: Mapped[str] = mapped_column(String(32), nullable=False)
    parameter: Mapped[str] = mapped_column(String(32), nullable=False)
    observed_on: Mapped[date] = mapped_column(Date, nullable=False)
    # decimal text keeps the feed's precision on every backend
    value: Mapped[str] = mapped_column(String(64), nullable=False)
    imported_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("instrument", "parameter", "observed_on", name="uq_price_observations_point"),
        Index("ix_price_observations_instrument_parameter_date", "instrument", "parameter", "observed_on"),
    )

    @property
    def decimal_value(self) -> Decimal:
        return Decimal(self.value)
