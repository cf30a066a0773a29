import logging
from student_registry.core.database import SessionLocal, create_database_tables
from student_registry.models.student import Student

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    ("Alice", 20),
    ("Bob", 21),
    ("Carol", 19),
]


def seed_data(session_factory=SessionLocal) -> int:
    """
    Seed sample students into an empty table.

    Returns the number of rows inserted (0 if the table already had data).
    """
    db = session_factory()
    try:
        # Skip if data already exists to avoid duplicates
        if db.query(Student).first():
            logger.info("Database already contains data. Skipping seed.")
            return 0

        logger.info("Seeding data...")
        db.add_all([Student(name=name, age=age) for name, age in SAMPLE_STUDENTS])
        db.commit()

        logger.info(f"Seeded {len(SAMPLE_STUDENTS)} students")
        return len(SAMPLE_STUDENTS)

    except Exception as e:
        logger.error(f"Error seeding data: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    create_database_tables()
    seed_data()
