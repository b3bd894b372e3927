"""
Seed script to populate Supabase with synthetic sessions and expenses for a
demo user, so every analytics endpoint has something to show.

    cd backend
    python scripts/seed_data.py demo-user --weeks 8
"""
import argparse
import logging
import os
import sys
from datetime import date, datetime, time, timedelta, timezone

import numpy as np

# Add the parent directory to sys.path so we can import backend modules
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.config import get_settings
from core.database import get_supabase_client
from data_engine.repository import RecordRepository
from schemas.records import EarningRecord, ExpenseCategory, ExpenseRecord, Platform

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Evening shifts pay better in the synthetic data so optimal hours stand out.
SHIFT_STARTS = [(11, 3), (17, 4), (21, 3)]
SHIFT_BASE_RATE = {11: 16.0, 17: 24.0, 21: 20.0}
PLATFORMS = [Platform.DOORDASH, Platform.UBER_EATS, Platform.GRUBHUB]


def build_sessions(user_id: str, weeks: int, rng: np.random.Generator) -> list:
    sessions = []
    today = date.today()
    for offset in range(weeks * 7, 0, -1):
        day = today - timedelta(days=offset)
        for start_hour, length in SHIFT_STARTS:
            if rng.random() < 0.4:
                continue
            start = datetime.combine(day, time(start_hour), tzinfo=timezone.utc)
            end = start + timedelta(hours=length)
            base = round(SHIFT_BASE_RATE[start_hour] * length * rng.uniform(0.6, 0.8), 2)
            tips = round(base * rng.uniform(0.2, 0.5), 2)
            bonuses = round(float(rng.choice([0.0, 0.0, 5.0])), 2)
            sessions.append(
                EarningRecord(
                    user_id=user_id,
                    platform=PLATFORMS[int(rng.integers(len(PLATFORMS)))],
                    date=day,
                    start_time=start,
                    end_time=end,
                    base_earning=base,
                    tips=tips,
                    bonuses=bonuses,
                    total_earning=round(base + tips + bonuses, 2),
                    delivery_count=int(rng.integers(2, 4)) * length,
                    miles_driven=round(float(rng.uniform(8, 14)) * length, 1),
                )
            )
    return sessions


def build_expenses(user_id: str, weeks: int, rng: np.random.Generator) -> list:
    expenses = []
    today = date.today()
    for week in range(weeks, 0, -1):
        day = today - timedelta(weeks=week)
        expenses.append(
            ExpenseRecord(
                user_id=user_id,
                date=day,
                category=ExpenseCategory.FUEL,
                amount=round(float(rng.uniform(35, 60)), 2),
            )
        )
        if week % 4 == 0:
            expenses.append(
                ExpenseRecord(
                    user_id=user_id,
                    date=day,
                    category=ExpenseCategory.PHONE_BILL,
                    amount=45.0,
                )
            )
    return expenses


def seed(user_id: str, weeks: int, seed_value: int) -> None:
    rng = np.random.default_rng(seed_value)
    repo = RecordRepository.from_settings(get_supabase_client(), get_settings())

    sessions = build_sessions(user_id, weeks, rng)
    expenses = build_expenses(user_id, weeks, rng)
    logger.info(f"Seeding {len(sessions)} sessions and {len(expenses)} expenses for {user_id}...")
    try:
        repo.insert_earnings(sessions)
        repo.insert_expenses(expenses)
    except Exception as e:
        logger.error(f"Failed to seed {user_id}: {e}")
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed demo earnings and expenses.")
    parser.add_argument("user_id")
    parser.add_argument("--weeks", type=int, default=8)
    parser.add_argument("--seed", type=int, default=7)
    args = parser.parse_args()
    seed(args.user_id, args.weeks, args.seed)
