"""
Security utilities for password hashing and file handling
"""
import os
from werkzeug.security import generate_password_hash, check_password_hash
from werkzeug.utils import secure_filename


def hash_password(password):
    return generate_password_hash(password)


def verify_password(password_hash, password):
    """Check a plaintext password against a stored hash"""
    if not password_hash or password is None:
        return False
    return check_password_hash(password_hash, password)


def sanitize_filename(filename, max_length=100):
    """werkzeug's secure_filename capped at max_length, keeping the extension"""
    safe_name = secure_filename(filename or '')
    if len(safe_name) > max_length:
        stem, ext = os.path.splitext(safe_name)
        safe_name = stem[:max_length - len(ext)] + ext
    return safe_name or None


def file_extension(filename):
    """Lower-cased extension of a sanitized filename, without the dot"""
    safe_name = sanitize_filename(filename)
    if not safe_name or '.' not in safe_name:
        return ''
    return safe_name.rsplit('.', 1)[1].lower()


def is_safe_path(path, base_dir):
    """
    Check if path is safe (within base directory)
    """
    abs_path = os.path.abspath(path)
    abs_base = os.path.abspath(base_dir)
    try:
        return os.path.commonpath([abs_path, abs_base]) == abs_base
    except ValueError:
        # Different drives on Windows
        return False
