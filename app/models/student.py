from sqlalchemy import Column, Integer, Text
from app.core.database import Base


class Student(Base):
    __tablename__ = "students"
    # INTEGER PRIMARY KEY AUTOINCREMENT: ids are never reused after a delete
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    age = Column(Integer, nullable=False)
