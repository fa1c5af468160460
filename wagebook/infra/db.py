"""
SQLAlchemy database models and configuration.

Architecture Decision: Why SQLAlchemy?
- Provides ORM for cleaner code and prevents SQL injection
- Supports async operations for non-blocking database access
- Easy to migrate to PostgreSQL or other databases if needed
"""

import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, Date, DateTime, Float, Text, ForeignKey


# Base class for all models
class Base(DeclarativeBase):
    pass


class DayEntryModel(Base):
    """SQLAlchemy model for DayEntry entity. One row per calendar day."""
    __tablename__ = "day_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[datetime.date] = mapped_column(Date, unique=True, nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False, default="work")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    manual_worked_seconds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    credited_override_seconds: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    segments: Mapped[List["TimeSegmentModel"]] = relationship(
        back_populates="day_entry",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="TimeSegmentModel.start"
    )


class TimeSegmentModel(Base):
    """SQLAlchemy model for TimeSegment entity. Owned by its day."""
    __tablename__ = "time_segments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    day_entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("day_entries.id", ondelete="CASCADE"), nullable=False
    )
    start: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)
    end: Mapped[datetime.datetime] = mapped_column(DateTime, nullable=False)
    break_seconds: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    day_entry: Mapped[DayEntryModel] = relationship(back_populates="segments")


class NetWageMonthConfigModel(Base):
    """SQLAlchemy model for per-month net wage inputs"""
    __tablename__ = "net_wage_month_configs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    month_start: Mapped[datetime.date] = mapped_column(Date, unique=True, nullable=False)
    wage_tax_percent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    pension_percent: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    monthly_allowance_euro: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    bonuses_csv: Mapped[str] = mapped_column(Text, nullable=False, default="")


class HolidayCalendarDayModel(Base):
    """SQLAlchemy model for imported public holidays"""
    __tablename__ = "holiday_calendar_days"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    key: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    local_name: Mapped[str] = mapped_column(String(200), nullable=False)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)
    subdivision_code: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    source_year: Mapped[int] = mapped_column(Integer, nullable=False)


class DatabaseEngine:
    """
    Manages database connection and session lifecycle.

    Singleton pattern ensures only one engine exists per application.
    """
    _instance: Optional['DatabaseEngine'] = None

    def __init__(self, db_url: str):
        self.engine = create_async_engine(db_url, echo=False)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    @classmethod
    def get_instance(cls, db_url: Optional[str] = None) -> 'DatabaseEngine':
        """Get or create the database engine instance"""
        if cls._instance is None:
            if db_url is None:
                from wagebook.infra.config import get_settings
                db_url = get_settings().get_db_url()

            cls._instance = cls(db_url)
        return cls._instance

    @classmethod
    async def reset_instance(cls) -> None:
        """Dispose the current engine so the next call creates a new one"""
        if cls._instance is not None:
            await cls._instance.engine.dispose()
            cls._instance = None

    async def create_tables(self):
        """Create all tables in the database"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def get_session(self) -> AsyncSession:
        """Get a new database session"""
        return self.session_factory()


# Convenience functions
def get_engine(db_url: Optional[str] = None) -> DatabaseEngine:
    """Get the database engine instance"""
    return DatabaseEngine.get_instance(db_url)


async def init_db(db_url: Optional[str] = None):
    """Initialize the database (create tables)"""
    engine = get_engine(db_url)
    await engine.create_tables()
