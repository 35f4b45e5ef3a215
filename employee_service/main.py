# main.py
import asyncio
import re
from fastapi import FastAPI, Depends, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from contextlib import asynccontextmanager

from . import crud, schemas
from .bootstrap import initialize_schema
from .database import get_async_session, create_engine, create_session_factory
from .errors import (
    EmployeeNotFound,
    register_exception_handlers,
    store_operation,
    LIST_FAILED,
    CREATE_FAILED,
    FETCH_FAILED,
    UPDATE_FAILED,
    DELETE_FAILED,
)
from .logger import get_logger

logger = get_logger(__name__)

PORT = 3000

# Seconds shutdown waits for an unfinished schema bootstrap before cancelling it.
BOOTSTRAP_SHUTDOWN_TIMEOUT = 5.0

# Bounds of the store's integer primary key column.
_INT_MIN = -(2 ** 31)
_INT_MAX = 2 ** 31 - 1

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_employee_id(raw: str) -> Optional[int]:
    """
    Parse a path segment the way a lenient integer parser would.

    Leading whitespace and a sign are accepted and trailing garbage is ignored
    ("12abc" is 12). Returns None, which matches no row, when there are no
    leading digits or the value cannot be stored in the id column.
    """
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    value = int(match.group(1))
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = create_engine()
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Not awaited: the server listens even if the schema step fails.
    app.state.bootstrap_task = asyncio.create_task(initialize_schema(engine))
    logger.info("Web service running at http://localhost:%d", PORT)

    yield

    try:
        await asyncio.wait_for(app.state.bootstrap_task, BOOTSTRAP_SHUTDOWN_TIMEOUT)
    except asyncio.TimeoutError:
        logger.warning(
            "Schema initialization still running after %ss; cancelled.",
            BOOTSTRAP_SHUTDOWN_TIMEOUT,
        )
    await engine.dispose()
    logger.info("Database connection pool closed.")


app = FastAPI(
    title="Employee Service",
    description="CRUD over a single employee table, backed by a pooled SQL store.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# --- API Endpoints ---

@app.get("/users", response_model=List[schemas.EmployeeRead], tags=["Employees"])
async def list_employees_endpoint(db: AsyncSession = Depends(get_async_session)):
    """Retrieve every employee, in the store's natural order."""
    with store_operation(LIST_FAILED):
        employees = await crud.get_all_employees(db)
    return [schemas.EmployeeRead.model_validate(employee) for employee in employees]


@app.post(
    "/users",
    response_model=schemas.EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    tags=["Employees"]
)
async def create_employee_endpoint(
        employee_input: Optional[schemas.EmployeeNameInput] = None,
        db: AsyncSession = Depends(get_async_session)
):
    """Create an employee from a name; phone and hire date are left empty."""
    employee_name = employee_input.employeename if employee_input else None
    with store_operation(CREATE_FAILED):
        employee = await crud.create_employee(db, employee_name)
    return schemas.EmployeeRead.model_validate(employee)


@app.get("/users/{employee_id}", response_model=schemas.EmployeeRead, tags=["Employees"])
async def get_employee_endpoint(
        employee_id: str,
        db: AsyncSession = Depends(get_async_session)
):
    parsed_id = parse_employee_id(employee_id)
    if parsed_id is None:
        raise EmployeeNotFound(employee_id)

    with store_operation(FETCH_FAILED):
        employee = await crud.get_employee_by_id(db, parsed_id)
    if not employee:
        raise EmployeeNotFound(employee_id)
    return schemas.EmployeeRead.model_validate(employee)


@app.put("/users/{employee_id}", response_model=schemas.EmployeeRead, tags=["Employees"])
async def update_employee_endpoint(
        employee_id: str,
        employee_input: Optional[schemas.EmployeeNameInput] = None,
        db: AsyncSession = Depends(get_async_session)
):
    """Rename an employee. Only the name can be changed."""
    parsed_id = parse_employee_id(employee_id)
    if parsed_id is None:
        raise EmployeeNotFound(employee_id)

    employee_name = employee_input.employeename if employee_input else None
    with store_operation(UPDATE_FAILED):
        employee = await crud.update_employee_name(db, parsed_id, employee_name)
    if not employee:
        raise EmployeeNotFound(employee_id)
    return schemas.EmployeeRead.model_validate(employee)


@app.delete("/users/{employee_id}", response_model=schemas.EmployeeRead, tags=["Employees"])
async def delete_employee_endpoint(
        employee_id: str,
        db: AsyncSession = Depends(get_async_session)
):
    """Delete an employee and return the row as it was."""
    parsed_id = parse_employee_id(employee_id)
    if parsed_id is None:
        raise EmployeeNotFound(employee_id)

    with store_operation(DELETE_FAILED):
        employee = await crud.delete_employee(db, parsed_id)
    if not employee:
        raise EmployeeNotFound(employee_id)
    return schemas.EmployeeRead.model_validate(employee)
