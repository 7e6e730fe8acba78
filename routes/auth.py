"""
Authentication routes: combined login/signup, logout and session status
"""
import logging

from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import IntegrityError

from models import db, User
from utils.auth import set_auth_cookie, clear_auth_cookie
from utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

# Attempts at picking a free username when a concurrent signup takes it first
SIGNUP_ATTEMPTS = 3


def generate_unique_username(base_username):
    """Return base_username, or base_username1, base_username2, ... whichever is free"""
    username = base_username
    counter = 1
    while User.query.filter_by(username=username).first() is not None:
        username = f'{base_username}{counter}'
        counter += 1
    return username


def create_user(username, password, email=None):
    password_hash = hash_password(password)
    for attempt in range(SIGNUP_ATTEMPTS):
        user = User(
            username=generate_unique_username(username),
            email=email,
            password_hash=password_hash,
            points=0,
            level=1,
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            logger.warning(f'Username race while creating {user.username!r}, retrying')
            continue
        return user
    raise RuntimeError('Could not allocate a unique username')


@auth_bp.route('/check-user')
def check_user():
    """Report whether a username is already registered"""
    username = request.args.get('username', '').strip()
    if not username:
        return jsonify({'error': 'Username is required'}), 400

    try:
        exists = User.query.filter_by(username=username).first() is not None
    except Exception as e:
        logger.error(f'Error checking user existence: {e}')
        return jsonify({'error': str(e)}), 500
    return jsonify({'exists': exists})


@auth_bp.route('/login', methods=['POST'])
def login():
    """Log in an existing user, or register one on first sight"""
    body = request.get_json(silent=True) or {}
    username = str(body.get('username') or '').strip()
    password = body.get('password') or ''
    email = str(body.get('email') or '').strip().lower() or None

    if not username or not isinstance(password, str) or not password:
        return jsonify({'error': 'Username and password are required'}), 400

    try:
        user = User.query.filter_by(username=username).first()

        if user is None:
            if current_app.config['SIGNUP_REQUIRES_EMAIL'] and not email:
                return jsonify({'error': 'Email is required for new accounts'}), 400
            if email and User.query.filter_by(email=email).first() is not None:
                return jsonify({'error': 'Email already registered'}), 400

            user = create_user(username, password, email=email)
            logger.info(f'Registered new user {user.username} (id={user.id})')
        elif not verify_password(user.password_hash, password):
            logger.info(f'Failed login for {username}')
            return jsonify({'error': 'Invalid credentials'}), 401

    except Exception as e:
        db.session.rollback()
        logger.exception('Login error')
        return jsonify({'error': str(e)}), 500

    response = jsonify({
        'message': 'Login successful',
        'user': user.public_dict(),
    })
    return set_auth_cookie(response, user)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the auth cookie"""
    response = jsonify({'message': 'Logout successful'})
    return clear_auth_cookie(response)


@auth_bp.route('/status')
@login_required
def status():
    """Profile of the user behind the auth cookie"""
    return jsonify(current_user.to_dict())
