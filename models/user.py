"""
User model for authentication and progress counters
"""
from flask_login import UserMixin
from datetime import datetime

from models import db, isoformat


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=True)
    password_hash = db.Column(db.String(256), nullable=False)
    points = db.Column(db.Integer, nullable=False, default=0)
    level = db.Column(db.Integer, nullable=False, default=1)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    schedules = db.relationship('Schedule', backref='user', lazy=True, cascade='all, delete')
    uploads = db.relationship('Upload', backref='user', lazy=True, cascade='all, delete')

    def __repr__(self):
        return f'<User {self.username}>'

    def get_id(self):
        return str(self.id)

    def public_dict(self):
        """Fields returned by login"""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
        }

    def to_dict(self):
        data = self.public_dict()
        data.update({
            'points': self.points,
            'level': self.level,
            'createdAt': isoformat(self.created_at),
        })
        return data
