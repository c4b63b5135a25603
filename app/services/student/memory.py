import threading
from typing import Dict, List

from app.core.exceptions import StudentNotFoundError
from app.schemas.student import Student, StudentBase


class InMemoryStudentStorage:
    """Process-local store with the same behaviour as the SQLite one. Handy for tests."""

    def __init__(self):
        self._rows: Dict[int, Student] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def create_student(self, name: str, email: str, age: int) -> int:
        with self._lock:
            # Ids only grow, like AUTOINCREMENT
            self._last_id += 1
            self._rows[self._last_id] = Student(id=self._last_id, name=name, email=email, age=age)
            return self._last_id

    def get_student_by_id(self, student_id: int) -> Student:
        with self._lock:
            row = self._rows.get(student_id)
        if row is None:
            raise StudentNotFoundError(student_id)
        return row.model_copy()

    def get_students(self) -> List[Student]:
        with self._lock:
            return [self._rows[k].model_copy() for k in sorted(self._rows)]

    def update_student_by_id(self, student_id: int, student: StudentBase) -> Student:
        with self._lock:
            if student_id in self._rows:
                self._rows[student_id] = Student(
                    id=student_id, name=student.name, email=student.email, age=student.age
                )
        return self.get_student_by_id(student_id)

    def delete_student_by_id(self, student_id: int) -> None:
        with self._lock:
            self._rows.pop(student_id, None)

    def close(self) -> None:
        pass
