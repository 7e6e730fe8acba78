"""
Task model: an item under a schedule
"""
from datetime import datetime

from models import db, isoformat


class Task(db.Model):
    __tablename__ = 'tasks'

    id = db.Column(db.Integer, primary_key=True)
    schedule_id = db.Column(db.Integer, db.ForeignKey('schedules.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    emoji = db.Column(db.String(16), nullable=True)
    start_time = db.Column(db.DateTime, nullable=True)
    end_time = db.Column(db.DateTime, nullable=True)
    completed = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Uploads outlive their task (task_id is nulled); stored objects go through the uploads endpoint
    uploads = db.relationship('Upload', backref='task', lazy=True)

    def __repr__(self):
        return f'<Task {self.title} - {"done" if self.completed else "open"}>'

    def to_dict(self, include_uploads=True):
        data = {
            'id': self.id,
            'scheduleId': self.schedule_id,
            'title': self.title,
            'emoji': self.emoji,
            'startTime': isoformat(self.start_time),
            'endTime': isoformat(self.end_time),
            'completed': self.completed,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_uploads:
            data['uploads'] = [upload.to_dict() for upload in self.uploads]
        return data
