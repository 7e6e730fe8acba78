"""
Database models for users, schedules, tasks and uploads
"""
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def isoformat(value):
    return value.isoformat() if value else None


from models.user import User  # noqa: E402
from models.schedule import Schedule  # noqa: E402
from models.task import Task  # noqa: E402
from models.upload import Upload  # noqa: E402

__all__ = ['db', 'isoformat', 'User', 'Schedule', 'Task', 'Upload']
