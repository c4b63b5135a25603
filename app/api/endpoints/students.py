import logging
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.deps import StudentId, get_raw_body, get_storage, parse_body
from app.schemas.student import (
    Student,
    StudentCreate,
    StudentCreated,
    StudentDeleted,
    StudentUpdate,
)
from app.services.student.storage import StudentStorage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=StudentCreated, status_code=status.HTTP_201_CREATED)
def create_student(
    body: bytes = Depends(get_raw_body),
    storage: StudentStorage = Depends(get_storage)
):
    """
    Create a student

    Requires:
    - **name**: non-empty
    - **email**: non-empty (format is not checked)
    - **age**: non-zero integer
    """
    logger.info("creating a student")
    student = parse_body(StudentCreate, body)
    student_id = storage.create_student(student.name, student.email, student.age)
    logger.info("student created", extra={"id": student_id})
    return StudentCreated(id=student_id)


@router.get("", response_model=List[Student])
def get_students(storage: StudentStorage = Depends(get_storage)):
    """
    List every student, ordered by id
    """
    logger.info("getting all students")
    return storage.get_students()


@router.get("/{student_id}", response_model=Student)
def get_student(
    student_id: StudentId,
    storage: StudentStorage = Depends(get_storage)
):
    """
    Get one student by id
    """
    logger.info("getting a student", extra={"id": student_id})
    return storage.get_student_by_id(student_id)


@router.put("/{student_id}", response_model=Student)
def update_student(
    student_id: StudentId,
    body: bytes = Depends(get_raw_body),
    storage: StudentStorage = Depends(get_storage)
):
    """
    Replace name, email and age of a student. The id never changes.
    """
    logger.info("updating a student", extra={"id": student_id})
    student = parse_body(StudentUpdate, body)
    updated = storage.update_student_by_id(student_id, student)
    logger.info("student updated", extra={"id": student_id})
    return updated


@router.delete("/{student_id}", response_model=StudentDeleted)
def delete_student(
    student_id: StudentId,
    storage: StudentStorage = Depends(get_storage)
):
    """
    Delete a student. Deleting an unknown id still succeeds.
    """
    logger.info("deleting a student", extra={"id": student_id})
    storage.delete_student_by_id(student_id)
    logger.info("student deleted", extra={"id": student_id})
    return StudentDeleted()
