"""
Task routes; ownership is checked through the parent schedule
"""
import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from models import db, Schedule, Task, Upload
from utils.gamification import award_task_completion
from utils.validation import (ValidationError, get_json_body, require_fields,
                              parse_datetime, parse_bool, parse_int, parse_str)

logger = logging.getLogger(__name__)

tasks_bp = Blueprint('tasks', __name__)

UPDATABLE_FIELDS = ('title', 'emoji', 'startTime', 'endTime', 'completed', 'scheduleId')


def owned_tasks():
    """Query of tasks whose schedule belongs to the current user"""
    return Task.query.join(Schedule).filter(Schedule.user_id == current_user.id)


def get_owned_task(task_id):
    return owned_tasks().filter(Task.id == task_id).first()


def get_owned_schedule(schedule_id):
    return Schedule.query.filter_by(id=schedule_id, user_id=current_user.id).first()


def check_times(start_time, end_time):
    if start_time and end_time and end_time < start_time:
        raise ValidationError('endTime must not be before startTime')


def parse_upload_links(value):
    """Upload links attached to a new task: [{url, type}, ...]"""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError('uploads must be a list')
    links = []
    for item in value:
        if not isinstance(item, dict) or not item.get('url'):
            raise ValidationError('Each upload needs a url')
        links.append((str(item['url']), str(item.get('type') or 'application/octet-stream')))
    return links


@tasks_bp.route('', methods=['GET'])
@login_required
def list_tasks():
    """All tasks across the user's schedules"""
    try:
        tasks = owned_tasks().order_by(Task.start_time, Task.id).all()
    except Exception as e:
        logger.error(f'Error fetching tasks: {e}')
        return jsonify({'error': str(e)}), 500
    return jsonify([task.to_dict() for task in tasks])


@tasks_bp.route('', methods=['POST'])
@login_required
def create_task():
    try:
        body = get_json_body(request)
        require_fields(body, 'title', 'scheduleId')
        schedule_id = parse_int(body['scheduleId'], 'scheduleId')
        start_time = parse_datetime(body.get('startTime'), 'startTime')
        end_time = parse_datetime(body.get('endTime'), 'endTime')
        check_times(start_time, end_time)
        completed = parse_bool(body.get('completed', False), 'completed')
        links = parse_upload_links(body.get('uploads'))
        title = parse_str(body['title'], 'title')
        if title is None:
            raise ValidationError('title must not be empty')
        emoji = parse_str(body.get('emoji'), 'emoji')
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    try:
        schedule = db.session.get(Schedule, schedule_id)
        if schedule is None:
            return jsonify({'error': 'Schedule not found'}), 404
        if schedule.user_id != current_user.id:
            logger.warning(f'User {current_user.id} tried to add a task to schedule {schedule_id}')
            return jsonify({'error': 'Forbidden'}), 403

        task = Task(
            schedule=schedule,
            title=title,
            emoji=emoji,
            start_time=start_time,
            end_time=end_time,
            completed=completed,
        )
        for url, mime_type in links:
            task.uploads.append(Upload(user_id=current_user.id, url=url, mime_type=mime_type))
        if completed:
            award_task_completion(current_user)

        db.session.add(task)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error creating task: {e}')
        return jsonify({'error': str(e)}), 500

    logger.info(f'User {current_user.id} created task {task.id}')
    return jsonify(task.to_dict()), 201


@tasks_bp.route('/<int:task_id>', methods=['PATCH'])
@login_required
def update_task(task_id):
    """Apply a partial update to one of the user's tasks"""
    try:
        body = get_json_body(request)
        unknown = sorted(set(body) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError('Unknown fields: ' + ', '.join(unknown))
        if not body:
            raise ValidationError('No fields to update')
        if 'title' in body:
            title = parse_str(body['title'], 'title')
            if title is None:
                raise ValidationError('title must not be empty')
        emoji = parse_str(body.get('emoji'), 'emoji')
        if 'scheduleId' in body:
            new_schedule_id = parse_int(body['scheduleId'], 'scheduleId')
        if 'completed' in body:
            completed = parse_bool(body['completed'], 'completed')
        start_time = parse_datetime(body.get('startTime'), 'startTime')
        end_time = parse_datetime(body.get('endTime'), 'endTime')
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    try:
        task = get_owned_task(task_id)
        if task is None:
            return jsonify({'error': 'Task not found'}), 404

        if 'scheduleId' in body and new_schedule_id != task.schedule_id:
            schedule = get_owned_schedule(new_schedule_id)
            if schedule is None:
                return jsonify({'error': 'Schedule not found'}), 404
            task.schedule = schedule

        if 'title' in body:
            task.title = title
        if 'emoji' in body:
            task.emoji = emoji
        if 'startTime' in body:
            task.start_time = start_time
        if 'endTime' in body:
            task.end_time = end_time
        try:
            check_times(task.start_time, task.end_time)
        except ValidationError as e:
            db.session.rollback()
            return jsonify({'error': str(e)}), 400

        if 'completed' in body:
            if completed and not task.completed:
                award_task_completion(current_user)
            task.completed = completed

        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error updating task {task_id}: {e}')
        return jsonify({'error': str(e)}), 500

    return jsonify(task.to_dict())


@tasks_bp.route('/<int:task_id>', methods=['DELETE'])
@login_required
def delete_task(task_id):
    try:
        task = get_owned_task(task_id)
        if task is None:
            return jsonify({'error': 'Task not found'}), 404
        db.session.delete(task)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error deleting task {task_id}: {e}')
        return jsonify({'error': str(e)}), 500

    logger.info(f'User {current_user.id} deleted task {task_id}')
    return '', 204
