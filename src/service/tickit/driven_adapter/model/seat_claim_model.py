from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class SeatClaimModel(Base):
    """One row per sold seat. The unique key is what makes double-selling impossible."""

    __tablename__ = 'seat_claim'
    __table_args__ = (UniqueConstraint('event_id', 'seat_id', name='uq_seat_claim_event_seat'),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[str] = mapped_column(String(36), ForeignKey('event.id'), nullable=False)
    seat_id: Mapped[str] = mapped_column(String(255), nullable=False)
    # Claimed before the order row is flushed, same transaction
    order_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
