import logging

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config
from models import Store
from auth import auth_bp
from account import account_bp
from course import course_bp

logger = logging.getLogger(__name__)


def configure_logging(level):
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def create_app(config_object=Config, store=None):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app.config['LOG_LEVEL'])

    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    if store is None:
        store = Store(
            app.config['SQLALCHEMY_DATABASE_URI'],
            **app.config['SQLALCHEMY_ENGINE_OPTIONS']
        )
    app.extensions['store'] = store.init()

    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(account_bp, url_prefix='/api')
    app.register_blueprint(course_bp, url_prefix='/api')

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"message": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"message": "Method not allowed"}), 405

    return app


def main():
    app = create_app()
    store = app.extensions['store']
    logger.info("Server listening on port %s", app.config['PORT'])
    try:
        app.run(host=app.config['HOST'], port=app.config['PORT'], debug=app.config['DEBUG'])
    finally:
        store.close()


if __name__ == '__main__':
    main()
