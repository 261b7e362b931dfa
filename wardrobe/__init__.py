from flask import Flask, request
from flask_caching import Cache
import os
import logging
from typing import Optional

from wardrobe.utils.formatting import (
    format_price, resolve_image_url,
    DEFAULT_LOCALE, DEFAULT_CURRENCY, DEFAULT_PLACEHOLDER_IMAGE
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)
logger = logging.getLogger(__name__)

# Initialize extensions
cache = Cache()

class Config:
    """Base configuration class"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Catalog backend
    CATALOG_API_BASE_URL = os.environ.get('CATALOG_API_BASE_URL')
    CATALOG_API_TIMEOUT = float(os.environ.get('CATALOG_API_TIMEOUT', 10))

    # Storefront presentation
    PRICE_LOCALE = os.environ.get('PRICE_LOCALE', DEFAULT_LOCALE)
    PRICE_CURRENCY = os.environ.get('PRICE_CURRENCY', DEFAULT_CURRENCY)
    PLACEHOLDER_IMAGE_URL = os.environ.get('PLACEHOLDER_IMAGE_URL', DEFAULT_PLACEHOLDER_IMAGE)
    SUGGESTION_LIMIT = int(os.environ.get('SUGGESTION_LIMIT', 4))
    CATALOG_PER_PAGE = int(os.environ.get('CATALOG_PER_PAGE', 12))

    # Cache configuration
    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'SimpleCache')
    CACHE_DEFAULT_TIMEOUT = int(os.environ.get('CACHE_DEFAULT_TIMEOUT', 300))

    # Security headers
    SESSION_COOKIE_SECURE = os.environ.get('FLASK_ENV') == 'production'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    @staticmethod
    def init_app(app):
        pass

class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = os.environ.get('FLASK_DEBUG', 'false').lower() in ['true', '1', 'yes', 'on']

class TestingConfig(Config):
    """Testing configuration, no caching and a fixed fake backend"""
    TESTING = True
    CATALOG_API_BASE_URL = 'http://catalog.test/api'
    CACHE_TYPE = 'NullCache'

class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    CACHE_TYPE = os.environ.get('CACHE_TYPE', 'RedisCache')
    CACHE_REDIS_URL = os.environ.get('REDIS_URL', 'redis://localhost:6379/0')
    CACHE_KEY_PREFIX = 'wardrobe:prod:'

    SEND_FILE_MAX_AGE_DEFAULT = 31536000  # 1 year cache for static files
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_SAMESITE = 'Strict'
    TEMPLATES_AUTO_RELOAD = False

    @classmethod
    def init_app(cls, app):
        Config.init_app(app)

        from logging.handlers import RotatingFileHandler

        if not app.debug:
            # Only log warnings and errors in production
            app.logger.setLevel(logging.WARNING)

            if os.environ.get('LOG_TO_FILE', 'false').lower() == 'true':
                file_handler = RotatingFileHandler('logs/app.log', maxBytes=10240, backupCount=10)
                file_handler.setFormatter(logging.Formatter(
                    '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
                ))
                file_handler.setLevel(logging.WARNING)
                app.logger.addHandler(file_handler)

config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}

def create_app(config_name: Optional[str] = None) -> Flask:
    """Application factory"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'default')

    app = Flask(__name__, template_folder='templates', static_folder='static')

    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    _validate_configuration(app)

    # Fall back to an in-process cache if the configured backend is unavailable
    try:
        cache.init_app(app)
    except Exception as e:
        logger.warning(f"Failed to initialize cache with {app.config.get('CACHE_TYPE', 'unknown')} backend: {e}")
        app.config['CACHE_TYPE'] = 'SimpleCache'
        cache.init_app(app)
        logger.info("Initialized cache with simple backend as fallback")

    from .routes.product import product as product_blueprint
    app.register_blueprint(product_blueprint)

    _register_template_helpers(app)
    _register_error_handlers(app)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-XSS-Protection'] = '1; mode=block'

        if config_name == 'production':
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains; preload'
            if request.endpoint and request.endpoint.startswith('static'):
                response.headers['Cache-Control'] = 'public, max-age=31536000'
        return response

    logger.info(f"Application created successfully with config: {config_name}")
    return app

def _validate_configuration(app: Flask) -> None:
    """Warn about configuration the storefront cannot work without"""
    if not app.config.get('CATALOG_API_BASE_URL'):
        # Pages still render, they just never leave the loading state
        logger.warning("CATALOG_API_BASE_URL is not set; product pages will not load any data")

    if app.config.get('SUGGESTION_LIMIT', 0) < 0:
        raise ValueError("SUGGESTION_LIMIT must not be negative")

def _register_template_helpers(app: Flask) -> None:
    """Jinja filters for prices and product images"""

    @app.template_filter('price')
    def price_filter(value):
        return format_price(
            value,
            locale=app.config['PRICE_LOCALE'],
            currency=app.config['PRICE_CURRENCY']
        )

    @app.template_filter('product_image')
    def product_image_filter(image_url):
        return resolve_image_url(image_url, app.config['PLACEHOLDER_IMAGE_URL'])

def _register_error_handlers(app: Flask) -> None:
    """Register centralized error handlers"""
    from flask import jsonify, render_template

    @app.errorhandler(400)
    def bad_request_error(error):
        if request.is_json:
            return jsonify({'error': 'Bad request'}), 400
        return render_template('Error_Pages/404_not_found.html'), 400

    @app.errorhandler(404)
    def not_found_error(error):
        if request.is_json:
            return jsonify({'error': 'Resource not found'}), 404
        return render_template('Error_Pages/404_not_found.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f'Internal server error: {str(error)}')
        if request.is_json:
            return jsonify({'error': 'Internal server error'}), 500
        return render_template('Error_Pages/500.html'), 500
