# models.py
from sqlmodel import SQLModel, Field
from datetime import date
from typing import Optional

class Employee(SQLModel, table=True):
    __tablename__ = "users"

    employee_id: Optional[int] = Field(default=None, primary_key=True)
    employee_name: str
    phone: Optional[str] = None
    hire_date: Optional[date] = None
