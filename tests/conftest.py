from datetime import date, timedelta
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from trackbit.db import configure_sqlite
from trackbit.models import Base
from trackbit.services import GoalService, HabitService, ProfileService, RoutineService

USER_ID = "user-1"


@pytest.fixture
def engine():
    test_engine = configure_sqlite(
        create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool, future=True)
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def habits(db):
    return HabitService(db, USER_ID)


@pytest.fixture
def routines(habits):
    return RoutineService(habits)


@pytest.fixture
def goals(habits):
    return GoalService(habits)


@pytest.fixture
def profiles(habits):
    return ProfileService(habits)


def days(start: date, count: int) -> list[date]:
    return [start + timedelta(days=i) for i in range(count)]


def make_habit(habit_id, name, frequency="daily", target_days=None, description=None):
    return SimpleNamespace(
        id=habit_id,
        name=name,
        description=description,
        frequency=frequency,
        target_days=target_days if target_days is not None else [0, 1, 2, 3, 4, 5, 6],
        archived_at=None,
    )


def make_log(habit_id, log_date, completed=True):
    return SimpleNamespace(habit_id=habit_id, log_date=log_date, completed=completed)
