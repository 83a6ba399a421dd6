from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Date, DateTime, Integer, Numeric, String, Text, Time, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class EventModel(Base):
    __tablename__ = 'event'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    organizer_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    age_restriction: Mapped[str] = mapped_column(String(20), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    is_physical: Mapped[bool] = mapped_column(Boolean, nullable=False)
    venue_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False)
    cover_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_reserved_seating: Mapped[bool] = mapped_column(Boolean, nullable=False)

    # Tier catalogue and seat layout are read and written whole
    tiers: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    seats: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    buyer_questions: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    # Client-authored trees, stored verbatim
    seat_map_config: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    ticket_design: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)

    max_tickets_per_order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    total_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    platform_fee: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    short_link: Mapped[str] = mapped_column(String(8), nullable=False, unique=True, index=True)
    status: Mapped[str] = mapped_column(String(20), default='PUBLISHED', nullable=False)
    sold: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Bumped on every tier or seat layout write; purchases commit only against the version they priced
    layout_version: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
