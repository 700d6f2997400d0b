from datetime import date

from pydantic import BaseModel, Field, model_validator

from schemas.common import ORMModel


class _DateRange(BaseModel):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _check_range(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class AcademicYearCreate(_DateRange):
    name: str
    school_id: int
    is_current: bool = False


class AcademicYearOut(ORMModel):
    id: int
    name: str
    start_date: date
    end_date: date
    is_current: bool
    school_id: int


class TermCreate(_DateRange):
    name: str
    term_number: int = Field(..., ge=1)
    is_current: bool = False


class TermOut(ORMModel):
    id: int
    name: str
    term_number: int
    start_date: date
    end_date: date
    is_current: bool
    academic_year_id: int
