from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from .extensions import db, migrate, login_manager
from .config import Config
from .errors import register_error_handlers

from .blueprints.auth.routes import auth_bp
from .blueprints.analytics.routes import analytics_bp
from .blueprints.budgets.routes import budgets_bp
from .blueprints.categories.routes import categories_bp
from .blueprints.dashboard.routes import dashboard_bp
from .blueprints.expenses.routes import expenses_bp
from .blueprints.savings.routes import savings_bp

# Shared by every account (user_id NULL)
DEFAULT_CATEGORIES = [
    ("Food & Drinks", "🍕", "#F44336"),
    ("Transportation", "🚗", "#2196F3"),
    ("Shopping", "🛍️", "#4CAF50"),
    ("Entertainment", "🎬", "#9C27B0"),
    ("Health & Medical", "🏥", "#FF9800"),
    ("Utilities", "💡", "#607D8B"),
    ("Travel", "✈️", "#FF5722"),
    ("Education", "📚", "#3F51B5"),
]


def seed_default_categories():
    from .models import Category
    existing = {c.name.lower() for c in Category.query.filter_by(user_id=None).all()}
    created = 0
    for name, icon, color in DEFAULT_CATEGORIES:
        if name.lower() not in existing:
            db.session.add(Category(user_id=None, name=name, icon=icon, color=color, is_custom=False))
            created += 1
    if created:
        db.session.commit()
    return created


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # Ensure tables exist for a smooth first run
    with app.app_context():
        db.create_all()
        try:
            created = seed_default_categories()
            if created:
                app.logger.info("Seeded %d default categories", created)
        except SQLAlchemyError:
            # Do not block app startup if seeding fails
            db.session.rollback()
            app.logger.exception("Seeding default categories failed")

    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(analytics_bp)
    app.register_blueprint(budgets_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(expenses_bp)
    app.register_blueprint(savings_bp)

    @app.route("/")
    def root():
        return jsonify({"name": "spendwise", "status": "ok"})

    return app
