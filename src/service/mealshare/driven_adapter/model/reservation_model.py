from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime, utc_now


class ReservationModel(Base):
    __tablename__ = 'reservations'
    __table_args__ = (
        # Latest-reservation-per-user lookup for the cooldown check
        Index('ix_reservations_user_id_created_at', 'user_id', 'created_at'),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey('users.id'), nullable=False)
    meal_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('meals.id'), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, default=utc_now, nullable=False)

    def __repr__(self):
        return (
            f'<ReservationModel(id={self.id}, user_id={self.user_id}, meal_id={self.meal_id})>'
        )
