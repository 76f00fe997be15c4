from datetime import datetime

from sqlalchemy import DateTime, Double, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class ExchangeRateDB(Base):
	__tablename__ = 'exchange_rates'

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	currency: Mapped[str] = mapped_column(String(10), nullable=False)
	bucket: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
	rate: Mapped[float] = mapped_column(Double, nullable=False)

	__table_args__ = (
		UniqueConstraint('currency', 'bucket', name='uq_currency_bucket'),
	)
