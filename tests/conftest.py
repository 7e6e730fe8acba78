import io

import pytest

from app import create_app
from models import db as _db


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SECRET_KEY': 'test-secret',
        'JWT_SECRET': 'test-jwt-secret',
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
        'UPLOAD_BASE_URL': None,
        'AUTH_COOKIE_SECURE': False,
        'SIGNUP_REQUIRES_EMAIL': False,
    })
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username='alice', password='pw1', **extra):
    return client.post('/auth/login', json=dict(username=username, password=password, **extra))


@pytest.fixture
def auth_client(client):
    """Client logged in as alice"""
    response = login(client)
    assert response.status_code == 200
    return client


@pytest.fixture
def other_client(app):
    """Second, independent client logged in as bob"""
    client = app.test_client()
    response = login(client, 'bob', 'pw2')
    assert response.status_code == 200
    return client


def make_schedule(client, **fields):
    body = {'title': 'Morning', 'time': '2024-05-01T08:30:00Z', 'icon': 'sun'}
    body.update(fields)
    response = client.post('/schedules', json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def make_task(client, schedule_id, **fields):
    body = {'title': 'Buy milk', 'scheduleId': schedule_id}
    body.update(fields)
    response = client.post('/tasks', json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def upload_file(client, data=b'hello', filename='notes.txt', content_type='text/plain', **form):
    form['file'] = (io.BytesIO(data), filename, content_type)
    return client.post('/uploads', data=form, content_type='multipart/form-data')
