"""
Flask entry point for the Schedule Clock API
"""
from flask import Flask, jsonify, g
from flask_login import LoginManager
from werkzeug.exceptions import HTTPException
import logging
import os

from config import Config
from models import db
from routes import BLUEPRINTS
from utils.auth import load_user_from_request, MISSING_TOKEN
from utils.storage import LocalStorage
from utils.tokens import TokenService

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)
logger = logging.getLogger(__name__)

login_manager = LoginManager()


@login_manager.request_loader
def load_user(request):
    return load_user_from_request(request)


@login_manager.unauthorized_handler
def unauthorized():
    reason = g.get('auth_rejection') or MISSING_TOKEN
    return jsonify({'error': reason}), 401


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'error': error.description}), error.code

    @app.errorhandler(413)
    def too_large(error):
        limit = app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)
        return jsonify({'error': f'File too large (max {limit}MB)'}), 413

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'Internal server error'}), 500


def create_app(test_config=None):
    """Build the app; test_config overrides values from Config"""
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    app.extensions['tokens'] = TokenService(app.config['JWT_SECRET'],
                                            max_age=app.config['TOKEN_MAX_AGE'])
    # STORAGE_BACKEND swaps in another StorageBackend implementation
    app.extensions['storage'] = app.config.get('STORAGE_BACKEND') or LocalStorage(
        app.config['UPLOAD_FOLDER'], base_url=app.config['UPLOAD_BASE_URL'])

    for blueprint, url_prefix in BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=url_prefix)

    @app.route('/healthz')
    def healthz():
        return jsonify({'ok': True})

    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    logger.info(f"App ready (database: {app.config['SQLALCHEMY_DATABASE_URI'].split('://')[0]})")
    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1', host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
