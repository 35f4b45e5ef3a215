# schemas.py
from sqlmodel import SQLModel
from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Optional


# Request body for create and update. A missing name reaches the store as NULL
# and fails its NOT NULL constraint.
class EmployeeNameInput(SQLModel):
    employeename: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"employeename": "Ada Lovelace"}
        }
    )


# Schema for reading an employee (camelCase on the wire)
class EmployeeRead(BaseModel):
    employee_id: int = Field(alias="employeeId")
    employee_name: str = Field(alias="employeeName")
    phone: Optional[str] = None
    hire_date: Optional[date] = Field(default=None, alias="hireDate")

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "employeeId": 1,
                "employeeName": "John Doe",
                "phone": "555-0100",
                "hireDate": "2020-01-15"
            }
        }
    )
