"""
Schedule routes, scoped to the logged in user
"""
import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user

from models import db, Schedule
from utils.validation import (ValidationError, get_json_body, require_fields,
                              parse_datetime, parse_int, parse_str)

logger = logging.getLogger(__name__)

schedules_bp = Blueprint('schedules', __name__)


@schedules_bp.route('', methods=['GET'])
@login_required
def list_schedules():
    """All schedules of the user with their tasks"""
    try:
        schedules = Schedule.query.filter_by(user_id=current_user.id)\
                                  .order_by(Schedule.hour, Schedule.time, Schedule.id)\
                                  .all()
    except Exception as e:
        logger.error(f'Error fetching schedules: {e}')
        return jsonify({'error': str(e)}), 500
    return jsonify([schedule.to_dict() for schedule in schedules])


@schedules_bp.route('', methods=['POST'])
@login_required
def create_schedule():
    try:
        body = get_json_body(request)
        require_fields(body, 'title', 'time')
        time = parse_datetime(body['time'], 'time')
        hour = time.hour
        if body.get('hour') is not None:
            hour = parse_int(body['hour'], 'hour')
            if not 0 <= hour <= 23:
                raise ValidationError('hour must be between 0 and 23')
        title = parse_str(body['title'], 'title')
        if title is None:
            raise ValidationError('title must not be empty')
        description = parse_str(body.get('description'), 'description')
        icon = parse_str(body.get('icon'), 'icon') or ''
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    schedule = Schedule(
        user_id=current_user.id,
        title=title,
        description=description,
        time=time,
        icon=icon,
        hour=hour,
    )
    try:
        db.session.add(schedule)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f'Error creating schedule: {e}')
        return jsonify({'error': str(e)}), 500

    logger.info(f'User {current_user.id} created schedule {schedule.id}')
    return jsonify(schedule.to_dict()), 201
