# myvote/__init__.py

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from werkzeug.middleware.proxy_fix import ProxyFix
from datetime import timedelta
import logging
import os


logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'dev-secret-change-me')
app.config['JWT_SECRET_KEY'] = os.environ.get('JWT_SECRET_KEY', 'dev-jwt-secret-change-me')
app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(hours=8)  # session lifetime
app.config['JWT_TOKEN_LOCATION'] = ['headers']  # Authorization: Bearer <token>

app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL', 'sqlite:///myvote.db')
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['AUDIT_LOG_DIR'] = os.environ.get('AUDIT_LOG_DIR', 'logs')

# Fix proxy headers for HTTPS
app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

# Initialize extensions
db = SQLAlchemy(app)
migrate = Migrate(app, db, directory=os.path.join(os.path.dirname(__file__), 'database', 'migrations'))
jwt = JWTManager(app)


@app.cli.command('init-db')
def init_db():
    """Create all tables (development databases without migrations)."""
    db.create_all()
    print("Database tables created.")


# Models must be imported so SQLAlchemy metadata is populated for
# create_all() and Flask-Migrate.
from myvote.database import models  # noqa: F401,E402

from myvote.errors import register_error_handlers  # noqa: E402

register_error_handlers(app)

from myvote import routes  # noqa: F401,E402
