"""Flask application factory for the Hijri calendar and zakat service."""
import logging

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


logger = logging.getLogger('hijri_zakat')


def create_app(config: dict | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Optional configuration dictionary to override defaults.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Trust X-Forwarded-For from reverse proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    # Default configuration
    from hijri_zakat.services.config import get_app_config
    app.config.update(get_app_config())

    # Override with provided config
    if config:
        app.config.update(config)

    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logger.setLevel(app.config['LOG_LEVEL'])

    # Register CLI commands
    from hijri_zakat import cli
    cli.register_cli(app)

    # Register blueprints
    from hijri_zakat.routes.health import health_bp
    from hijri_zakat.routes.api import api_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp, url_prefix='/api/v1')

    logger.debug(
        "App created (locale=%s, fiqh=%s, nisab=%s)",
        app.config['DEFAULT_LOCALE'],
        app.config['DEFAULT_FIQH'],
        app.config['DEFAULT_NISAB_STANDARD'],
    )
    return app
