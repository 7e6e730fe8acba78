"""
Points and levels awarded for finished tasks
"""
import logging

from flask import current_app

logger = logging.getLogger(__name__)


def level_for(points, points_per_level):
    return 1 + max(points, 0) // points_per_level


def award_task_completion(user):
    """Credit the user for completing a task; the caller commits"""
    config = current_app.config
    user.points = (user.points or 0) + config['POINTS_PER_TASK']
    new_level = level_for(user.points, config['POINTS_PER_LEVEL'])
    if new_level > (user.level or 1):
        logger.info(f'{user.username} reached level {new_level}')
    user.level = max(new_level, user.level or 1)
    return user.points
