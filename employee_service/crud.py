# crud.py
from sqlalchemy import delete, update
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from .models import Employee
from typing import List, Optional


# --- Employee CRUD ---

async def get_all_employees(db: AsyncSession) -> List[Employee]:
    result = await db.execute(select(Employee))
    return list(result.scalars().all())


async def create_employee(db: AsyncSession, employee_name: Optional[str]) -> Employee:
    # Only the name is written; phone and hire_date stay NULL on this path.
    db_employee = Employee(employee_name=employee_name)

    db.add(db_employee)
    await db.commit()
    await db.refresh(db_employee)
    return db_employee


async def get_employee_by_id(db: AsyncSession, employee_id: int) -> Optional[Employee]:
    statement = select(Employee).where(Employee.employee_id == employee_id)
    result = await db.execute(statement)
    return result.scalars().first()


async def update_employee_name(
        db: AsyncSession,
        employee_id: int,
        employee_name: Optional[str]
) -> Optional[Employee]:
    statement = (
        update(Employee)
        .where(Employee.employee_id == employee_id)
        .values(employee_name=employee_name)
        .returning(Employee)
        .execution_options(synchronize_session="fetch")
    )
    result = await db.execute(statement)
    db_employee = result.scalars().first()
    await db.commit()
    return db_employee


async def delete_employee(db: AsyncSession, employee_id: int) -> Optional[Employee]:
    statement = (
        delete(Employee)
        .where(Employee.employee_id == employee_id)
        .returning(Employee)
        .execution_options(synchronize_session="fetch")
    )
    result = await db.execute(statement)
    db_employee = result.scalars().first()
    await db.commit()
    return db_employee
