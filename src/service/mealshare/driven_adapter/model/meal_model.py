from datetime import datetime

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base
from src.platform.types.utc_datetime import UtcDateTime, utc_now


class MealModel(Base):
    __tablename__ = 'meals'
    __table_args__ = (
        CheckConstraint(
            'portions_available >= 0', name='ck_meals_portions_available_non_negative'
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    merchant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('users.id'), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default='', nullable=False)
    portions_available: Mapped[int] = mapped_column(Integer, nullable=False)
    pickup_time: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        UtcDateTime, default=utc_now, nullable=False, index=True
    )

    def __repr__(self):
        return (
            f'<MealModel(id={self.id}, title={self.title}, '
            f'portions_available={self.portions_available})>'
        )
