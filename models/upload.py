"""
Upload model for files relayed to object storage
"""
from datetime import datetime

from models import db, isoformat


class Upload(db.Model):
    __tablename__ = 'uploads'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    task_id = db.Column(db.Integer, db.ForeignKey('tasks.id', ondelete='SET NULL'), nullable=True)
    url = db.Column(db.String(500), nullable=False)
    mime_type = db.Column(db.String(120), nullable=False, default='application/octet-stream')
    storage_key = db.Column(db.String(255), nullable=True)  # null for links attached to a task by URL
    file_name = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Upload {self.file_name or self.url} - {self.mime_type}>'

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'taskId': self.task_id,
            'url': self.url,
            'type': self.mime_type,
            'fileName': self.file_name,
            'createdAt': isoformat(self.created_at),
        }
