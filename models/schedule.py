"""
Schedule model: a timed slot on the user's clock face
"""
from datetime import datetime

from models import db, isoformat


class Schedule(db.Model):
    __tablename__ = 'schedules'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    time = db.Column(db.DateTime, nullable=False)
    icon = db.Column(db.String(100), nullable=False, default='')
    hour = db.Column(db.Integer, nullable=False)  # 0-23, where the slot sits on the clock
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tasks = db.relationship('Task', backref='schedule', lazy=True,
                            cascade='all, delete-orphan', order_by='Task.id')

    def __repr__(self):
        return f'<Schedule {self.title} @ {self.hour}>'

    def to_dict(self, include_tasks=True):
        data = {
            'id': self.id,
            'userId': self.user_id,
            'title': self.title,
            'description': self.description,
            'time': isoformat(self.time),
            'icon': self.icon,
            'hour': self.hour,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }
        if include_tasks:
            data['tasks'] = [task.to_dict(include_uploads=False) for task in self.tasks]
        return data
