"""
Upload routes: relay files to object storage and keep a record per file
"""
import logging

from flask import Blueprint, request, jsonify, current_app, send_from_directory, abort
from flask_login import login_required, current_user

from models import db, Schedule, Task, Upload
from utils.security import sanitize_filename
from utils.storage import LocalStorage
from utils.validation import ValidationError, parse_int

logger = logging.getLogger(__name__)

uploads_bp = Blueprint('uploads', __name__)


def get_storage():
    return current_app.extensions['storage']


@uploads_bp.route('', methods=['GET'])
@login_required
def list_uploads():
    """The user's uploads, newest first"""
    try:
        uploads = Upload.query.filter_by(user_id=current_user.id)\
                              .order_by(Upload.created_at.desc(), Upload.id.desc())\
                              .all()
    except Exception as e:
        logger.error(f'Error fetching uploads: {e}')
        return jsonify({'error': str(e)}), 500
    return jsonify([upload.to_dict() for upload in uploads])


@uploads_bp.route('', methods=['POST'])
@login_required
def create_upload():
    """Relay a multipart file to storage, then record where it went"""
    file = request.files.get('file')
    if file is None or not file.filename:
        return jsonify({'error': 'No file uploaded'}), 400

    task_id = None
    if request.form.get('taskId'):
        try:
            task_id = parse_int(request.form['taskId'], 'taskId')
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400

    try:
        if task_id is not None:
            task = Task.query.join(Schedule)\
                             .filter(Task.id == task_id, Schedule.user_id == current_user.id)\
                             .first()
            if task is None:
                return jsonify({'error': 'Task not found'}), 404

        stored = get_storage().save(file)

        # No compensation: a failed insert leaves the stored object behind
        upload = Upload(
            user_id=current_user.id,
            task_id=task_id,
            url=stored.url,
            mime_type=file.mimetype or 'application/octet-stream',
            storage_key=stored.key,
            file_name=sanitize_filename(file.filename),
        )
        db.session.add(upload)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error uploading file: {e}')
        return jsonify({'error': str(e)}), 500

    logger.info(f'User {current_user.id} uploaded {upload.file_name} as {upload.storage_key}')
    return jsonify(upload.to_dict()), 201


@uploads_bp.route('', methods=['DELETE'])
@uploads_bp.route('/<int:upload_id>', methods=['DELETE'])
@login_required
def delete_upload(upload_id=None):
    """Delete the stored object first, then the record"""
    if upload_id is None:
        raw_id = request.args.get('id')
        if not raw_id:
            return jsonify({'error': 'Upload ID is required'}), 400
        try:
            upload_id = parse_int(raw_id, 'id')
        except ValidationError as e:
            return jsonify({'error': str(e)}), 400

    try:
        upload = db.session.get(Upload, upload_id)
        if upload is None:
            return jsonify({'error': 'Upload not found'}), 404
        if upload.user_id != current_user.id:
            logger.warning(f'User {current_user.id} tried to delete upload {upload_id}')
            return jsonify({'error': 'Forbidden'}), 403

        if upload.storage_key:
            get_storage().delete(upload.storage_key)

        db.session.delete(upload)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error deleting upload {upload_id}: {e}')
        return jsonify({'error': str(e)}), 500

    logger.info(f'User {current_user.id} deleted upload {upload_id}')
    return '', 204


@uploads_bp.route('/files/<path:key>')
@login_required
def serve_file(key):
    """Serve an object kept by the local storage backend to its owner"""
    storage = get_storage()
    if not isinstance(storage, LocalStorage):
        abort(404)
    upload = Upload.query.filter_by(storage_key=key, user_id=current_user.id).first()
    if upload is None:
        abort(404)
    return send_from_directory(storage.root, key, mimetype=upload.mime_type)
