import logging
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from student_registry.core.exceptions import DatabaseConnectionError
from student_registry.models.student import Student
from student_registry.schemas.student import StudentCreate, StudentRow

logger = logging.getLogger(__name__)


def ensure_connection(db: Session) -> None:
    """
    Acquire the session's connection up front.

    Failing here means the database is unreachable, which is reported
    differently from errors raised by the queries that follow.
    """
    try:
        db.connection()
    except DBAPIError as e:
        driver_message = str(e.orig) if e.orig is not None else str(e)
        # Drivers such as psycopg2 add indented hint lines; the response is one line
        driver_message = " ".join(driver_message.split())
        logger.error(f"Database connection failed: {driver_message}")
        raise DatabaseConnectionError(driver_message) from e


def get_student(db: Session, student_id: int) -> Optional[Student]:
    """Fetch one student by ID"""
    ensure_connection(db)
    return db.get(Student, student_id)


def get_students(db: Session, skip: int = 0, limit: int = 100) -> List[Student]:
    """List students, oldest first, with offset pagination"""
    ensure_connection(db)
    stmt = select(Student).order_by(Student.id).offset(skip).limit(limit)
    return list(db.scalars(stmt))


def decode_rows(rows: Iterable[Mapping[str, Any]]) -> List[StudentRow]:
    """Decode raw rows into StudentRow records, skipping malformed ones."""
    decoded = []
    for row in rows:
        try:
            decoded.append(StudentRow.model_validate(dict(row)))
        except ValidationError as e:
            logger.warning(f"Skipping malformed student row {dict(row)!r}: {e.error_count()} error(s)")
    return decoded


def list_registry_rows(db: Session) -> List[StudentRow]:
    """
    Full, unfiltered scan of the students table for the registry page.

    Raises:
        DatabaseConnectionError: the database could not be reached.
    """
    ensure_connection(db)
    result = db.execute(select(Student.name, Student.age).order_by(Student.id))
    return decode_rows(result.mappings())


def create_student(db: Session, student: StudentCreate) -> Student:
    """Insert a new student and return the stored row"""
    ensure_connection(db)
    db_student = Student(name=student.name, age=student.age)
    db.add(db_student)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_student)
    logger.info(f"Created student {db_student.name!r} (id={db_student.id})")
    return db_student
