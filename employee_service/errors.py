# errors.py
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .logger import get_logger

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "User not found"

LIST_FAILED = "Error fetching users from the database"
CREATE_FAILED = "Error creating user in the database"
FETCH_FAILED = "Error fetching user from the database"
UPDATE_FAILED = "Error updating user in the database"
DELETE_FAILED = "Error deleting user from the database"

# Bad request bodies share the 500 contract of the route they were sent to.
_BODY_FAILURES = {
    "POST": CREATE_FAILED,
    "PUT": UPDATE_FAILED,
}


class EmployeeNotFound(Exception):
    """No row matched the requested identifier."""


class StoreFailure(Exception):
    """Any error raised by the persistence layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@contextmanager
def store_operation(message: str) -> Iterator[None]:
    """Turn store errors into StoreFailure, keeping the detail in the server log."""
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        logger.exception("%s: %s", message, exc)
        raise StoreFailure(message) from exc


async def employee_not_found_handler(request: Request, exc: EmployeeNotFound) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"message": NOT_FOUND_MESSAGE},
    )


async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": exc.message},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _BODY_FAILURES.get(request.method, "Error processing request")
    logger.error("%s: invalid request body: %s", message, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EmployeeNotFound, employee_not_found_handler)
    app.add_exception_handler(StoreFailure, store_failure_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
