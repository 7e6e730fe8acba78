"""
HTTP routes, one blueprint per resource
"""
from routes.auth import auth_bp
from routes.schedules import schedules_bp
from routes.tasks import tasks_bp
from routes.uploads import uploads_bp

BLUEPRINTS = (
    (auth_bp, '/auth'),
    (schedules_bp, '/schedules'),
    (tasks_bp, '/tasks'),
    (uploads_bp, '/uploads'),
)
