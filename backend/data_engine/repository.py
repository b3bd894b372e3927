"""
data_engine/repository.py
─────────────────────────
Storage collaborator: the ONLY place in the codebase that reads or writes
the ``earnings`` and ``expenses`` tables.

Rows coming back from Supabase are loosely typed (numbers as strings,
missing optional columns, timestamps with assorted offsets).  They are
normalised with pandas and turned into frozen
:class:`~schemas.records.EarningRecord` / :class:`~schemas.records.ExpenseRecord`
instances before anything in ``analytics`` sees them.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from supabase import Client

from core.config import Settings
from schemas.records import DateRange, EarningRecord, ExpenseRecord

logger = logging.getLogger(__name__)

# Column defaults applied when a row omits an optional value.
_EARNING_DEFAULTS: Dict[str, Any] = {
    "base_earning": 0.0,
    "tips": 0.0,
    "bonuses": 0.0,
    "delivery_count": 1,
    "miles_driven": 0.0,
}


class RecordStoreError(RuntimeError):
    """Raised when the database cannot be queried or written."""


# ── Row normalisation ─────────────────────────────────────────────────────────


def _frame(rows: Sequence[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(list(rows))
    # Booked day is the UTC calendar day of the stored value.
    df["date"] = pd.to_datetime(df["date"], utc=True, format="ISO8601").dt.date
    return df


def _numeric(df: pd.DataFrame, column: str, default: Any) -> pd.Series:
    if column not in df.columns:
        return pd.Series(default, index=df.index)
    return pd.to_numeric(df[column], errors="coerce").fillna(default)


def _none_for_missing(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows as dicts with NaN / NaT replaced by ``None``."""
    return df.astype(object).where(df.notna(), None).to_dict("records")


def earnings_from_rows(rows: Sequence[Dict[str, Any]], tz: str = "UTC") -> List[EarningRecord]:
    """
    Convert raw ``earnings`` rows into :class:`EarningRecord` instances.

    Args:
        rows: Row dicts as returned by Supabase.
        tz:   Zone the session timestamps are converted to, so that
              hour-of-day analytics reflect the driver's local clock.
    """
    if not rows:
        return []

    df = _frame(rows)
    for column, default in _EARNING_DEFAULTS.items():
        df[column] = _numeric(df, column, default)
    df["total_earning"] = pd.to_numeric(df["total_earning"], errors="coerce")
    # Missing hours are derived from the session span by EarningRecord.
    if "hours_worked" in df.columns:
        df["hours_worked"] = pd.to_numeric(df["hours_worked"], errors="coerce")
    else:
        df["hours_worked"] = None
    # Fractional seconds come back trimmed, so precision varies row to row.
    for column in ("start_time", "end_time"):
        df[column] = pd.to_datetime(df[column], utc=True, format="ISO8601").dt.tz_convert(tz)

    return [
        EarningRecord(
            user_id=str(row["user_id"]),
            platform=row["platform"],
            date=row["date"],
            start_time=row["start_time"].to_pydatetime(),
            end_time=row["end_time"].to_pydatetime(),
            base_earning=row["base_earning"],
            tips=row["tips"],
            bonuses=row["bonuses"],
            total_earning=row["total_earning"],
            delivery_count=int(row["delivery_count"]),
            hours_worked=row["hours_worked"],
            miles_driven=row["miles_driven"],
            notes=row.get("notes"),
        )
        for row in _none_for_missing(df)
    ]


def expenses_from_rows(rows: Sequence[Dict[str, Any]]) -> List[ExpenseRecord]:
    """Convert raw ``expenses`` rows into :class:`ExpenseRecord` instances."""
    if not rows:
        return []

    df = _frame(rows)
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")
    if "tax_deductible" in df.columns:
        df["tax_deductible"] = df["tax_deductible"].fillna(True).astype(bool)
    else:
        df["tax_deductible"] = True

    return [
        ExpenseRecord(
            user_id=str(row["user_id"]),
            date=row["date"],
            category=row["category"],
            amount=row["amount"],
            tax_deductible=row["tax_deductible"],
            description=row.get("description"),
        )
        for row in _none_for_missing(df)
    ]


# ── Repository ────────────────────────────────────────────────────────────────


class RecordRepository:
    """
    Read/write access to one Supabase project's earning and expense rows.

    Args:
        db:             Supabase client.
        earnings_table: Name of the work-session table.
        expenses_table: Name of the expense table.
        tz:             Zone session timestamps are converted to.

    Example:
        >>> repo = RecordRepository(get_supabase_client())
        >>> repo.fetch_earnings("user-1", DateRange.last_days(30))
    """

    def __init__(
        self,
        db: Client,
        earnings_table: str = "earnings",
        expenses_table: str = "expenses",
        tz: str = "UTC",
    ) -> None:
        self._db = db
        self.earnings_table = earnings_table
        self.expenses_table = expenses_table
        self.tz = tz

    @classmethod
    def from_settings(cls, db: Client, settings: Settings) -> "RecordRepository":
        """Build a repository with table names and timezone from ``settings``."""
        return cls(
            db,
            earnings_table=settings.EARNINGS_TABLE,
            expenses_table=settings.EXPENSES_TABLE,
            tz=settings.ANALYTICS_TIMEZONE,
        )

    # ── public API ────────────────────────────────────────────────────────

    def fetch_earnings(
        self, user_id: str, date_range: Optional[DateRange] = None
    ) -> List[EarningRecord]:
        """All of ``user_id``'s sessions, optionally limited to ``date_range``."""
        rows = self._select(self.earnings_table, user_id, date_range)
        logger.debug("Fetched %d earning rows for %s", len(rows), user_id)
        return earnings_from_rows(rows, self.tz)

    def fetch_expenses(
        self, user_id: str, date_range: Optional[DateRange] = None
    ) -> List[ExpenseRecord]:
        """All of ``user_id``'s expenses, optionally limited to ``date_range``."""
        rows = self._select(self.expenses_table, user_id, date_range)
        logger.debug("Fetched %d expense rows for %s", len(rows), user_id)
        return expenses_from_rows(rows)

    def recent_earnings(self, user_id: str, limit: int = 5) -> List[EarningRecord]:
        """The ``limit`` most recent sessions, newest first."""
        rows = self._select(self.earnings_table, user_id, None, newest_first=True, limit=limit)
        return earnings_from_rows(rows, self.tz)

    def recent_expenses(self, user_id: str, limit: int = 5) -> List[ExpenseRecord]:
        """The ``limit`` most recent expenses, newest first."""
        rows = self._select(self.expenses_table, user_id, None, newest_first=True, limit=limit)
        return expenses_from_rows(rows)

    def insert_earnings(self, records: Sequence[EarningRecord]) -> int:
        """Insert sessions; returns the number of rows written."""
        return self._insert(self.earnings_table, records)

    def insert_expenses(self, records: Sequence[ExpenseRecord]) -> int:
        """Insert expenses; returns the number of rows written."""
        return self._insert(self.expenses_table, records)

    # ── private helpers ───────────────────────────────────────────────────

    def _select(
        self,
        table: str,
        user_id: str,
        date_range: Optional[DateRange],
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        try:
            query = self._db.table(table).select("*").eq("user_id", user_id)
            if date_range is not None:
                query = query.gte("date", date_range.start.date().isoformat()).lte(
                    "date", date_range.end.date().isoformat()
                )
            query = query.order("date", desc=newest_first)
            if limit is not None:
                query = query.limit(limit)
            return query.execute().data or []
        except Exception as exc:
            logger.exception("Query on %s failed for user %s", table, user_id)
            raise RecordStoreError(f"Could not read '{table}': {exc}") from exc

    def _insert(self, table: str, records: Sequence[Any]) -> int:
        if not records:
            return 0
        payload = [record.model_dump(mode="json") for record in records]
        try:
            self._db.table(table).insert(payload).execute()
        except Exception as exc:
            logger.exception("Insert into %s failed", table)
            raise RecordStoreError(f"Could not write '{table}': {exc}") from exc
        logger.info("Inserted %d rows into %s", len(payload), table)
        return len(payload)
