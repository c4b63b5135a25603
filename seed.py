import logging
import sys

from app.core.config import ConfigError, load_settings, resolve_config_path
from app.core.exceptions import StorageError
from app.main import build_storage
from app.services.student.storage import StudentStorage

logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    {"name": "Rakesh", "email": "rakesh@test.com", "age": 35},
    {"name": "Anita Sharma", "email": "anita@test.com", "age": 21},
    {"name": "Vikram Rao", "email": "vikram@test.com", "age": 24},
]


def seed_data(storage: StudentStorage) -> int:
    """
    Insert the sample students unless the store already has rows.

    Returns the number of students inserted.
    """
    # Check if data already exists to avoid duplication
    if storage.get_students():
        logger.info("Database already contains data. Skipping seed.")
        return 0

    logger.info("Seeding data...")
    for student in SAMPLE_STUDENTS:
        storage.create_student(student["name"], student["email"], student["age"])

    logger.info("Data seeded successfully!")
    return len(SAMPLE_STUDENTS)


if __name__ == "__main__":
    # Setup logging to see output
    logging.basicConfig(level=logging.INFO)

    try:
        settings = load_settings(resolve_config_path())
        storage = build_storage(settings)
    except (ConfigError, StorageError) as e:
        logger.error(f"Error seeding data: {e}")
        sys.exit(1)

    try:
        seed_data(storage)
    finally:
        storage.close()  # Always close the connection
