"""Blueprint registrations for application routes."""

from flask import Flask

from .billing import blueprint as billing_blueprint
from .config import blueprint as config_blueprint
from .localization import blueprint as translations_blueprint
from .payouts import blueprint as payouts_blueprint
from .reports import blueprint as reports_blueprint
from .tax_info import blueprint as tax_info_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(billing_blueprint)
    app.register_blueprint(payouts_blueprint)
    app.register_blueprint(tax_info_blueprint)
    app.register_blueprint(reports_blueprint)
    app.register_blueprint(config_blueprint)
    app.register_blueprint(translations_blueprint)
