"""Server-rendered student pages."""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import (
    Blueprint,
    Response,
    abort,
    current_app,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from ..flash import pop_flashes, push_flash
from ..schema import LEVELS, STATUSES, ValidationError, require_valid_academic_record
from ..store import InvalidStudentId, StoreUnavailable, StudentNotFound, StudentStore

students_bp = Blueprint("students", __name__)

logger = logging.getLogger(__name__)

PROGRAM_FIELDS = ("level", "program", "status")


def get_store() -> StudentStore:
    return current_app.extensions["student_store"]


def _student_form() -> Dict[str, Any]:
    return {
        "name": request.form.get("name"),
        "huid": request.form.get("huid"),
        "email": request.form.get("email"),
    }


def _render(template: str, **context: Any) -> str:
    return render_template(template, flash=pop_flashes(session), **context)


@students_bp.get("/")
def home():
    student_count = get_store().count()
    return _render("main.html", student_count=student_count)


@students_bp.get("/student")
def list_students():
    try:
        students = get_store().list_all()
    except StoreUnavailable as exc:
        logger.warning("Listing students failed: %s", exc)
        return Response("Error: No students.", status=503, mimetype="text/plain")

    return _render("student_list.html", students=students)


@students_bp.get("/student/create")
def new_student():
    return _render("student_create.html")


@students_bp.post("/student")
def create_student():
    try:
        get_store().create(_student_form())
    except ValidationError as exc:
        logger.info("Rejected new student: %s", exc)
        push_flash(session, "There was a problem creating your new student.")
        return redirect(url_for("students.new_student"))

    push_flash(session, "You made a new student!")
    return redirect(url_for("students.list_students"))


@students_bp.get("/student/<student_id>")
def show_student(student_id: str):
    # StudentNotFound / InvalidStudentId are turned into a 404 by the app.
    student = get_store().find_by_id(student_id)
    return _render("student.html", student=student, levels=LEVELS, statuses=STATUSES)


def _update_student(student_id: str, *, with_program: bool):
    store = get_store()
    record = None
    if with_program and any(request.form.get(field) for field in PROGRAM_FIELDS):
        record = {field: request.form.get(field) for field in PROGRAM_FIELDS}

    try:
        # Reject a bad program entry before the student fields are written.
        if record is not None:
            require_valid_academic_record(record)
        store.update(student_id, _student_form())
        if record is not None:
            store.add_academic_record(student_id, record)
    except (StudentNotFound, InvalidStudentId) as exc:
        logger.warning("Student update error: %s", exc)
        abort(404)
    except ValidationError as exc:
        logger.info("Rejected update for student %s: %s", student_id, exc)
        push_flash(session, "There was a problem updating your student.")
        return redirect(url_for("students.show_student", student_id=student_id))

    push_flash(session, "You successfully updated your student.")
    return redirect(url_for("students.list_students"))


@students_bp.post("/student/<student_id>")
def update_student(student_id: str):
    return _update_student(student_id, with_program=False)


@students_bp.post("/student/<student_id>/program")
def update_student_program(student_id: str):
    """Update the student and, when program fields are sent, enroll them."""

    return _update_student(student_id, with_program=True)


@students_bp.post("/student/<student_id>/delete")
def delete_student(student_id: str):
    try:
        get_store().delete_by_id(student_id)
    except (StudentNotFound, InvalidStudentId) as exc:
        logger.warning("Student delete error: %s", exc)
        push_flash(session, "There was a problem deleting your student.")
        return redirect(url_for("students.show_student", student_id=student_id))

    push_flash(session, "You deleted your student.")
    return redirect(url_for("students.list_students"))


__all__ = ["students_bp", "get_store"]
