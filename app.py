# app.py

from flask import Flask, g, request, jsonify
from config import get_config
from extensions import db, migrate
import os
import uuid
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from logging_config import setup_logging, get_logger

# Configure logging as early as possible
setup_logging(app_name="studio-migration", log_level=os.environ.get('LOG_LEVEL', 'INFO'))
logger = get_logger(__name__)

# Configure Sentry for production error tracking
def init_sentry():
    """Initialize Sentry error tracking in production."""
    sentry_dsn = os.environ.get('SENTRY_DSN')
    if sentry_dsn and os.environ.get('FLASK_ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(transaction_style='endpoint'),
                SqlalchemyIntegration()
            ],
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
            environment=os.environ.get('FLASK_ENV', 'development'),
            release=os.environ.get('GIT_SHA', 'unknown')
        )
        logger.info("Sentry error tracking initialized")

init_sentry()

def create_app(config_name=None, test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize app with config
    config_class.init_app(app)

    if test_config:
        app.config.update(test_config)

    setup_logging(app_name="studio-migration", log_level=app.config.get('LOG_LEVEL', 'INFO'))

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    db.init_app(app)
    migrate.init_app(app, db)

    # Service registry with lazy loading
    from services.registry import ServiceRegistry
    registry = ServiceRegistry()

    # db.session is request/app-context scoped, so singletons can hold it
    registry.register('db_session', db.session)

    registry.register_factory(
        'user_repository',
        lambda db_session: _create_user_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'membership_repository',
        lambda db_session: _create_membership_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'column_mapper',
        lambda: _create_column_mapper()
    )
    registry.register_factory(
        'import_executor',
        lambda user_repository, membership_repository: _create_import_executor(
            user_repository, membership_repository, app.config['MIGRATION_ERROR_LIMIT']
        ),
        dependencies=['user_repository', 'membership_repository']
    )
    registry.register_factory(
        'migration',
        lambda column_mapper, import_executor: _create_migration_service(
            column_mapper, import_executor, app.config['MIGRATION_PREVIEW_SAMPLE_SIZE']
        ),
        dependencies=['column_mapper', 'import_executor']
    )

    # Validate all dependencies are registered
    errors = registry.validate_dependencies()
    if errors:
        for error in errors:
            logger.error(f"Service dependency error: {error}")
        raise RuntimeError(f"Service dependency errors: {errors}")

    # Attach registry to app
    app.services = registry

    # Add request tracking middleware
    @app.before_request
    def before_request():
        g.request_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())
        logger.info("Request started",
                   request_id=g.request_id,
                   method=request.method,
                   path=request.path)

    @app.after_request
    def after_request(response):
        response.headers['X-Request-ID'] = getattr(g, 'request_id', '')
        logger.info("Request completed",
                   request_id=getattr(g, 'request_id', None),
                   status_code=response.status_code)
        return response

    # Global error handlers - API clients always get a JSON error body
    @app.errorhandler(HTTPException)
    def http_error(error):
        logger.warning("HTTP error",
                      request_id=getattr(g, 'request_id', None),
                      status_code=error.code,
                      path=request.path)
        code = (error.name or 'error').upper().replace(' ', '_')
        return jsonify({'error': {'code': code, 'message': error.description}}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        logger.error("Internal server error",
                    request_id=getattr(g, 'request_id', None),
                    error=str(error),
                    exc_info=True)
        message = 'An unexpected error occurred' if not app.debug else str(error)
        return jsonify({'error': {'code': 'INTERNAL_ERROR', 'message': message}}), 500

    # Health check endpoint
    @app.route('/health')
    def health_check():
        """Health check endpoint for monitoring - no auth required"""
        from sqlalchemy import text
        health_status = {
            'status': 'healthy',
            'service': 'studio-migration'
        }
        try:
            db.session.execute(text('SELECT 1'))
            health_status['database'] = 'connected'
        except Exception as e:
            logger.error("Health check database error", error=str(e))
            health_status['database'] = 'error'
            health_status['status'] = 'unhealthy'
        return jsonify(health_status), 200 if health_status['status'] == 'healthy' else 503

    # Register blueprints for routes
    from routes.migration_routes import migration_bp
    app.register_blueprint(migration_bp)

    # Register CLI commands
    from scripts import commands
    commands.init_app(app)

    return app


# Service Factory Functions
# These are only called when the service is first requested

def _create_user_repository(db_session):
    """Create UserRepository instance"""
    from repositories.user_repository import UserRepository
    logger.info("Initializing UserRepository")
    return UserRepository(session=db_session)

def _create_membership_repository(db_session):
    """Create MembershipRepository instance"""
    from repositories.membership_repository import MembershipRepository
    logger.info("Initializing MembershipRepository")
    return MembershipRepository(session=db_session)

def _create_column_mapper():
    """Create ColumnMapper with the default rule table"""
    from services.migration.column_mapper import ColumnMapper, ColumnMapperConfig
    return ColumnMapper(ColumnMapperConfig())

def _create_import_executor(user_repository, membership_repository, error_limit):
    """Create ImportExecutor bound to the identity and membership stores"""
    from services.migration.import_executor import ImportExecutor
    logger.info("Initializing ImportExecutor")
    return ImportExecutor(
        user_repository=user_repository,
        membership_repository=membership_repository,
        error_limit=error_limit
    )

def _create_migration_service(column_mapper, import_executor, sample_size):
    """Create MigrationService instance with dependencies"""
    from services.migration_service import MigrationService
    logger.info("Initializing MigrationService")
    return MigrationService(
        column_mapper=column_mapper,
        import_executor=import_executor,
        sample_size=sample_size
    )
