from typing import Union
from pydantic import BaseModel, ConfigDict, Field

NAME_MAX_LENGTH = 100
AGE_MIN = 1
AGE_MAX = 150


class StudentBase(BaseModel):
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    age: int = Field(ge=AGE_MIN, le=AGE_MAX)


class StudentCreate(StudentBase):
    pass


class StudentInDB(StudentBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class Student(StudentInDB):
    pass


class StudentRow(BaseModel):
    """
    One row of the registry page.

    Rows come from a table whose schema is owned elsewhere, so age is
    accepted as either an integer or free text and no limits are applied.
    """
    name: str
    age: Union[int, str]

    model_config = ConfigDict(from_attributes=True)

    @property
    def label(self) -> str:
        return f"{self.name} - Age: {self.age}"
