from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List
from student_registry.api.deps import get_db
from student_registry.core.exceptions import NotFoundException
from student_registry.services.student import student as crud_student
from student_registry.schemas.student import Student, StudentCreate

router = APIRouter()


@router.get("/", response_model=List[Student])
def get_students(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    """
    List students, oldest first

    - **skip**: number of records to skip (default: 0)
    - **limit**: maximum number of records (default: 100)
    """
    return crud_student.get_students(db, skip=skip, limit=limit)


@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: int,
    db: Session = Depends(get_db)
):
    """
    Fetch one student by ID
    """
    student = crud_student.get_student(db, student_id=student_id)
    if not student:
        raise NotFoundException("Student not found")
    return student


@router.post("/", response_model=Student, status_code=status.HTTP_201_CREATED)
def create_student(
    student: StudentCreate,
    db: Session = Depends(get_db)
):
    """
    Create a student

    - **name**: 1 to 100 characters
    - **age**: integer between 1 and 150
    """
    return crud_student.create_student(db=db, student=student)
