import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import (
    check_database_connection,
    create_database_tables,
    create_session_factory,
)
from app.core.exceptions import StorageError, StudentNotFoundError
from app.models.student import Student as StudentRow
from app.schemas.student import Student, StudentBase

logger = logging.getLogger(__name__)


class SQLiteStudentStorage:
    """
    Students kept in the ``students`` table of a SQLite file.

    Every statement goes through SQLAlchemy constructs, so values are
    always sent as bound parameters. One short session per call; the
    engine's pool makes the object safe to share between requests.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = create_session_factory(engine)
        try:
            check_database_connection(engine)
            create_database_tables(engine)
        except SQLAlchemyError as e:
            raise StorageError(f"sqlite: init storage: {e}") from e

    def create_student(self, name: str, email: str, age: int) -> int:
        row = StudentRow(name=name, email=email, age=age)
        with self.SessionLocal() as db:
            try:
                db.add(row)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"create student: {e}") from e
        return row.id

    def get_student_by_id(self, student_id: int) -> Student:
        stmt = select(StudentRow).where(StudentRow.id == student_id).limit(1)
        with self.SessionLocal() as db:
            try:
                row = db.execute(stmt).scalar_one_or_none()
            except SQLAlchemyError as e:
                raise StorageError(f"get student by id: {e}") from e
        if row is None:
            raise StudentNotFoundError(student_id)
        return Student.model_validate(row)

    def get_students(self) -> List[Student]:
        stmt = select(StudentRow).order_by(StudentRow.id)
        with self.SessionLocal() as db:
            try:
                rows = db.execute(stmt).scalars().all()
            except SQLAlchemyError as e:
                raise StorageError(f"get students: {e}") from e
        return [Student.model_validate(row) for row in rows]

    def update_student_by_id(self, student_id: int, student: StudentBase) -> Student:
        # No existence check: an unknown id updates nothing and the re-read below fails
        stmt = (
            update(StudentRow)
            .where(StudentRow.id == student_id)
            .values(name=student.name, email=student.email, age=student.age)
        )
        with self.SessionLocal() as db:
            try:
                result = db.execute(stmt)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"update student by id: {e}") from e
        logger.debug("update executed", extra={"id": student_id, "rows": result.rowcount})
        return self.get_student_by_id(student_id)

    def delete_student_by_id(self, student_id: int) -> None:
        stmt = delete(StudentRow).where(StudentRow.id == student_id)
        with self.SessionLocal() as db:
            try:
                db.execute(stmt)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                raise StorageError(f"delete student by id: {e}") from e

    def close(self) -> None:
        self.engine.dispose()
