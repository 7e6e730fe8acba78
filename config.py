"""
Configuration for the Schedule Clock API
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _database_url():
    url = os.environ.get('DATABASE_URL', 'sqlite:///database.db')
    # Some hosts still hand out the old scheme
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql://', 1)
    return url


def _flag(name, default='false'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-change-this-in-production')
    JWT_SECRET = os.environ.get('JWT_SECRET', SECRET_KEY)

    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Auth cookie
    AUTH_COOKIE_NAME = 'auth_token'
    AUTH_COOKIE_SECURE = _flag('AUTH_COOKIE_SECURE')
    TOKEN_MAX_AGE = 24 * 60 * 60  # 1 day
    SIGNUP_REQUIRES_EMAIL = _flag('SIGNUP_REQUIRES_EMAIL')

    # File upload configurations
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
    UPLOAD_FOLDER = os.path.abspath(os.environ.get('UPLOAD_FOLDER', 'uploads'))
    UPLOAD_BASE_URL = os.environ.get('UPLOAD_BASE_URL')

    # Gamification
    POINTS_PER_TASK = int(os.environ.get('POINTS_PER_TASK', 10))
    POINTS_PER_LEVEL = int(os.environ.get('POINTS_PER_LEVEL', 100))
