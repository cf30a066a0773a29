"""
Registry page: the add-student form and the server-rendered student list.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from student_registry.api.deps import get_db
from student_registry.core.config import settings
from student_registry.schemas.student import AGE_MAX, AGE_MIN, NAME_MAX_LENGTH, StudentCreate
from student_registry.services.student import student as crud_student

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter()


@router.get("/", response_class=HTMLResponse, summary="Registry page")
def registry_page(request: Request, db: Session = Depends(get_db)):
    """
    Render the form and every stored student.

    An unreachable database replaces the whole page with a single error line.
    """
    students = crud_student.list_registry_rows(db)
    return templates.TemplateResponse(
        request,
        "registry.html",
        {"title": settings.PAGE_TITLE, "students": students},
    )


@router.post("/add_student", summary="Add a student from the registry form")
def add_student(
    name: str = Form(..., min_length=1, max_length=NAME_MAX_LENGTH),
    age: int = Form(..., ge=AGE_MIN, le=AGE_MAX),
    db: Session = Depends(get_db),
):
    crud_student.create_student(db, StudentCreate(name=name, age=age))
    return RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
