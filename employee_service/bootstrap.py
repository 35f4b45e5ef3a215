# bootstrap.py
"""Schema bootstrap: create the employee table and seed it when empty."""
from datetime import date

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel, select

from .database import create_session_factory
from .logger import get_logger
from .models import Employee

logger = get_logger(__name__)

SEED_EMPLOYEES = (
    {"employee_name": "John Doe", "phone": "555-0100", "hire_date": date(2020, 1, 15)},
    {"employee_name": "John Mai", "phone": "555-0101", "hire_date": date(2021, 3, 22)},
    {"employee_name": "John Nguyen", "phone": "555-0102", "hire_date": date(2022, 7, 1)},
)


async def create_db_and_tables(engine: AsyncEngine) -> None:
    """Initializes the database tables."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def seed_employees(db: AsyncSession) -> int:
    """Insert the seed rows if the table is empty. Returns how many were added."""
    result = await db.execute(select(func.count()).select_from(Employee))
    if result.scalar_one() > 0:
        return 0

    db.add_all([Employee(**row) for row in SEED_EMPLOYEES])
    await db.commit()
    return len(SEED_EMPLOYEES)


async def initialize_schema(engine: AsyncEngine) -> bool:
    """
    Ensure the employee table exists and holds the seed rows on first run.

    Failures are logged and reported through the return value only; the
    caller keeps serving requests either way.
    """
    try:
        await create_db_and_tables(engine)
        logger.info("Table '%s' is ready.", Employee.__tablename__)

        async with create_session_factory(engine)() as session:
            seeded = await seed_employees(session)
        if seeded:
            logger.info("Seeded %d employees into an empty table.", seeded)
    except (SQLAlchemyError, OSError):
        logger.exception("Error initializing the database")
        return False
    return True
