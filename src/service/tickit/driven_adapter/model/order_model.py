from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base


class OrderModel(Base):
    __tablename__ = 'order'

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    event_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('event.id'), nullable=False, index=True
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    seat_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    claimed_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default='SUCCESS', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )

    tickets: Mapped[List['OrderTicketModel']] = relationship(
        'OrderTicketModel',
        back_populates='order',
        lazy='selectin',
        cascade='all, delete-orphan',
        order_by='OrderTicketModel.id',
    )


class OrderTicketModel(Base):
    __tablename__ = 'order_ticket'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[str] = mapped_column(
        String(36), ForeignKey('order.id'), nullable=False, index=True
    )
    seat_id: Mapped[str] = mapped_column(String(255), nullable=False)
    qr_code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    scanned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    scanned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    order: Mapped[OrderModel] = relationship('OrderModel', back_populates='tickets')
