from student_registry.core.database import get_db

__all__ = ["get_db"]
