from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from pydantic_core import PydanticCustomError

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1

SQLiteInt = Annotated[StrictInt, Field(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)]


class StudentBase(BaseModel):
    # Wrong JSON types are rejected ("35" is not an age)
    name: StrictStr
    email: StrictStr
    age: SQLiteInt

    # Unknown keys, id included, are ignored
    model_config = ConfigDict(extra="ignore")

    @field_validator("name", "email", "age")
    @classmethod
    def not_empty(cls, v):
        """Empty strings and a zero age count as missing."""
        if v == "" or v == 0:
            raise PydanticCustomError("required", "Field required")
        return v


class StudentCreate(StudentBase):
    pass


class StudentUpdate(StudentBase):
    pass


class Student(BaseModel):
    id: int
    name: str
    email: str
    age: int

    model_config = ConfigDict(from_attributes=True)


class StudentCreated(BaseModel):
    id: int


class StudentDeleted(BaseModel):
    status: str = "deleted"
