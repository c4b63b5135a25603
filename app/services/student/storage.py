from typing import List, Protocol

from app.schemas.student import Student, StudentBase


class StudentStorage(Protocol):
    """
    What the HTTP layer needs from a student store.

    Any backend providing these methods can be plugged into the app.
    Lookups of a missing id raise ``StudentNotFoundError``; any other
    failure of the backend raises ``StorageError``.
    """

    def create_student(self, name: str, email: str, age: int) -> int:
        """Insert a row and return the id assigned to it."""
        ...

    def get_student_by_id(self, student_id: int) -> Student:
        ...

    def get_students(self) -> List[Student]:
        """All rows, ``[]`` when there are none."""
        ...

    def update_student_by_id(self, student_id: int, student: StudentBase) -> Student:
        """Overwrite name/email/age and return the row as stored afterwards."""
        ...

    def delete_student_by_id(self, student_id: int) -> None:
        """Remove the row; deleting an unknown id is not an error."""
        ...

    def close(self) -> None:
        ...
