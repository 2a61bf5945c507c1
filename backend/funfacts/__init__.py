from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    origins = flask_app.config.get('CORS_ORIGINS') or []
    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    from funfacts.main import main
    flask_app.register_blueprint(main)

    from funfacts.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from funfacts.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the game session tables."""
        import funfacts.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('catalog-check')
    def catalog_check_command():
        """Loads the catalog and prints what was found."""
        from funfacts.catalog import get_catalog
        from funfacts.services.games import CatalogLoadError
        with flask_app.app_context():
            try:
                catalog = get_catalog(refresh=True)
            except CatalogLoadError as exc:
                raise click.ClickException(str(exc))
            click.echo(f'{len(catalog.people)} people, {len(catalog.facts)} facts, {len(catalog.pets)} pets')
            for person in catalog.people:
                marker = '' if person.image_ref else '  (no portrait)'
                click.echo(f'  {person.name}{marker}')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(catalog_check_command)

    return flask_app
