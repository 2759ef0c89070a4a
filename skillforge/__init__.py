import atexit
import logging
from datetime import datetime, timezone
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_cors import CORS

logger = logging.getLogger(__name__)

# Initialize extensions
db = SQLAlchemy()
bcrypt = Bcrypt()
jwt = JWTManager()

DEV_JWT_SECRET = 'dev-jwt-secret-key-change-me-in-production'


def create_app(config_object='skillforge.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_object)

    from skillforge.config import missing_settings
    from skillforge.errors import ConfigurationError, register_error_handlers

    missing = missing_settings(app.config)
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")
    if not app.config.get('JWT_SECRET_KEY'):
        logger.warning('JWT_SECRET_KEY is not set; using a development default.')
        app.config['JWT_SECRET_KEY'] = DEV_JWT_SECRET

    # Initialize extensions
    db.init_app(app)
    bcrypt.init_app(app)
    jwt.init_app(app)

    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Authorization", "Content-Type", "X-Requested-With"],
            "supports_credentials": True,
        }
    })

    register_error_handlers(app)

    # Create tables if they don't exist
    with app.app_context():
        from skillforge import models  # noqa: F401
        db.create_all()
        if not app.config.get('TESTING'):
            engine = db.engine
            atexit.register(engine.dispose)

    # Import and register Blueprints
    from skillforge.auth_routes import auth_bp
    from skillforge.skill_routes import skill_bp
    from skillforge.goal_routes import goal_bp
    from skillforge.ai_routes import ai_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(skill_bp, url_prefix='/api/skills')
    app.register_blueprint(goal_bp, url_prefix='/api/goals')
    app.register_blueprint(ai_bp, url_prefix='/api/ai')

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({
            'status': 'success',
            'data': {
                'message': 'SkillForge API is running',
                'timestamp': datetime.now(timezone.utc).isoformat(),
            },
        }), 200

    logger.info('SkillForge API configured (allowed origins: %s)', app.config['CORS_ORIGINS'])
    return app
