"""Usage repository for the token/cost ledger."""

import datetime as dt
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chatwrapper.models.usage_record import UsageRecord


@dataclass(frozen=True)
class UsageDay:
    """Usage totals for one calendar day."""

    date: dt.date
    input_tokens: int
    output_tokens: int
    total_tokens: int
    cost_usd: float


def today_utc() -> dt.date:
    """Current calendar day in UTC; every ledger row is stamped with it."""
    return dt.datetime.now(dt.UTC).date()


class UsageRepository:
    """Append-only ledger of per-call token usage."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(
        self,
        user_id: str,
        input_tokens: int,
        output_tokens: int,
        total_tokens: int,
        cost_usd: float,
        day: dt.date | None = None,
    ) -> UsageRecord:
        """Append one usage row."""
        record = UsageRecord(
            user_id=user_id,
            date=day or today_utc(),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=total_tokens,
            cost_usd=cost_usd,
        )
        self._session.add(record)
        await self._session.flush()
        return record

    async def summarize(self, user_id: str, limit_days: int = 30) -> list[UsageDay]:
        """Sum usage per day, newest day first, at most ``limit_days`` days."""
        stmt = (
            select(
                UsageRecord.date,
                func.sum(UsageRecord.input_tokens).label("input_tokens"),
                func.sum(UsageRecord.output_tokens).label("output_tokens"),
                func.sum(UsageRecord.total_tokens).label("total_tokens"),
                func.sum(UsageRecord.cost_usd).label("cost_usd"),
            )
            .where(UsageRecord.user_id == user_id)
            .group_by(UsageRecord.date)
            .order_by(UsageRecord.date.desc())
            .limit(limit_days)
        )
        result = await self._session.execute(stmt)
        return [
            UsageDay(
                date=row.date,
                input_tokens=int(row.input_tokens or 0),
                output_tokens=int(row.output_tokens or 0),
                total_tokens=int(row.total_tokens or 0),
                cost_usd=float(row.cost_usd or 0.0),
            )
            for row in result
        ]
