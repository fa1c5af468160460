"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. The calculation engine
only ever sees detached pydantic snapshots returned from here, never live
ORM objects, so a concurrent edit cannot change a day mid-computation.
"""

import datetime
import logging
from typing import Iterable, List, Optional

from sqlalchemy import select, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

from wagebook.domain.models import DayEntry, HolidayCalendarDay, NetWageMonthConfig
from wagebook.infra.db import (
    DayEntryModel,
    HolidayCalendarDayModel,
    NetWageMonthConfigModel,
    TimeSegmentModel,
    get_engine,
)

logger = logging.getLogger(__name__)


class _Repository:
    def __init__(self, session: Optional[AsyncSession] = None):
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()


class DayEntryRepository(_Repository):
    """
    Handles all DayEntry-related database operations.

    Converts between domain models (Pydantic) and ORM models (SQLAlchemy).
    """

    async def get_all(self) -> List[DayEntry]:
        """All days, ordered by date. This is the engine's snapshot."""
        session = await self._get_session()
        async with session:
            result = await session.execute(select(DayEntryModel).order_by(DayEntryModel.date))
            return [DayEntry.model_validate(m) for m in result.scalars().all()]

    async def get_by_date(self, day: datetime.date) -> Optional[DayEntry]:
        """Get the entry of a specific day"""
        session = await self._get_session()
        async with session:
            model = await self._get_model(session, day)
            return DayEntry.model_validate(model) if model else None

    async def get_range(self, start_date: datetime.date, end_date: datetime.date) -> List[DayEntry]:
        """Get all entries with start_date <= date <= end_date"""
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(DayEntryModel)
                .where(and_(DayEntryModel.date >= start_date, DayEntryModel.date <= end_date))
                .order_by(DayEntryModel.date)
            )
            return [DayEntry.model_validate(m) for m in result.scalars().all()]

    async def upsert(self, entry: DayEntry) -> DayEntry:
        """
        Create the day or replace the existing entry of that date.

        Segments are replaced as a whole; at most one entry exists per date.
        """
        session = await self._get_session()
        async with session:
            model = await self._get_model(session, entry.date)
            if model is None:
                model = DayEntryModel(date=entry.date)
                session.add(model)

            model.type = entry.type.value
            model.notes = entry.notes
            model.manual_worked_seconds = entry.manual_worked_seconds
            model.credited_override_seconds = entry.credited_override_seconds
            model.segments = [
                TimeSegmentModel(start=s.start, end=s.end, break_seconds=s.break_seconds)
                for s in entry.segments
            ]

            await session.commit()
            logger.info(f"Saved {entry.type.value} day {entry.date}")

            session.expunge_all()
            saved = await self._get_model(session, entry.date)
            return DayEntry.model_validate(saved)

    async def delete(self, day: datetime.date) -> None:
        """
        Clear a day back to "no entry". Its segments go with it.

        Raises:
            LookupError: if the day has no entry
        """
        session = await self._get_session()
        async with session:
            model = await self._get_model(session, day)
            if model is None:
                raise LookupError(f"No entry for {day}")
            await session.delete(model)
            await session.commit()
            logger.info(f"Deleted day {day}")

    async def delete_all(self) -> int:
        """Delete all day entries. Returns count of deleted days."""
        session = await self._get_session()
        async with session:
            await session.execute(delete(TimeSegmentModel))
            result = await session.execute(delete(DayEntryModel))
            await session.commit()
            return result.rowcount

    @staticmethod
    async def _get_model(session: AsyncSession, day: datetime.date) -> Optional[DayEntryModel]:
        result = await session.execute(select(DayEntryModel).where(DayEntryModel.date == day))
        return result.scalar_one_or_none()


class NetWageConfigRepository(_Repository):
    """
    Handles per-month net wage configs.
    """

    async def get_all(self) -> List[NetWageMonthConfig]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(NetWageMonthConfigModel).order_by(NetWageMonthConfigModel.month_start)
            )
            return [NetWageMonthConfig.model_validate(m) for m in result.scalars().all()]

    async def get_for_month(self, month: datetime.date) -> Optional[NetWageMonthConfig]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(NetWageMonthConfigModel)
                .where(NetWageMonthConfigModel.month_start == month.replace(day=1))
            )
            model = result.scalar_one_or_none()
            return NetWageMonthConfig.model_validate(model) if model else None

    async def upsert(self, config: NetWageMonthConfig) -> NetWageMonthConfig:
        """Create or update the config of a month"""
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(NetWageMonthConfigModel)
                .where(NetWageMonthConfigModel.month_start == config.month_start)
            )
            model = result.scalar_one_or_none()
            if model is None:
                model = NetWageMonthConfigModel(month_start=config.month_start)
                session.add(model)

            model.wage_tax_percent = config.wage_tax_percent
            model.pension_percent = config.pension_percent
            model.monthly_allowance_euro = config.monthly_allowance_euro
            model.bonuses_csv = config.bonuses_csv

            await session.commit()
            await session.refresh(model)
            return NetWageMonthConfig.model_validate(model)


class HolidayRepository(_Repository):
    """
    Handles imported public holidays.
    """

    async def get_year(self, country_code: str, subdivision_code: Optional[str],
                       year: int) -> List[HolidayCalendarDay]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                self._year_query(select(HolidayCalendarDayModel), country_code, subdivision_code, year)
                .order_by(HolidayCalendarDayModel.date)
            )
            return [HolidayCalendarDay.model_validate(m) for m in result.scalars().all()]

    async def replace_year(self, country_code: str, subdivision_code: Optional[str], year: int,
                           days: Iterable[HolidayCalendarDay]) -> int:
        """
        Replace a region's holidays of one year. Duplicate keys are skipped.

        Returns:
            Number of inserted holidays
        """
        session = await self._get_session()
        async with session:
            await session.execute(
                self._year_query(delete(HolidayCalendarDayModel), country_code, subdivision_code, year)
            )

            inserted = 0
            seen_keys = set()
            for day in days:
                if day.key in seen_keys:
                    continue
                seen_keys.add(day.key)
                session.add(HolidayCalendarDayModel(
                    key=day.key,
                    date=day.date,
                    local_name=day.local_name,
                    country_code=day.country_code,
                    subdivision_code=day.subdivision_code,
                    source_year=day.source_year
                ))
                inserted += 1

            await session.commit()
            logger.info(f"Imported {inserted} holidays for {country_code.upper()} {year}")
            return inserted

    @staticmethod
    def _year_query(stmt, country_code: str, subdivision_code: Optional[str], year: int):
        subdivision = subdivision_code.strip().upper() if subdivision_code else None
        stmt = stmt.where(
            HolidayCalendarDayModel.source_year == year,
            HolidayCalendarDayModel.country_code == country_code.strip().upper()
        )
        if subdivision is None:
            return stmt.where(HolidayCalendarDayModel.subdivision_code.is_(None))
        return stmt.where(HolidayCalendarDayModel.subdivision_code == subdivision)
