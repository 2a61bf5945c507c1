import os
import sys
import pytest

# Ensure the backend root (containing the `funfacts` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from funfacts import create_app, db, socketio
from funfacts.services.games import StaticCatalogSource, load_catalog


PEOPLE = [
    {'name': 'Ann', 'image': '/people/ann.jpg'},
    {'name': 'Bo', 'image': '/people/bo.png'},
]
FACTS = [
    {'id': 1, 'name': 'Ann', 'fact': 'likes tea'},
    {'id': 2, 'name': 'Bo', 'fact': 'likes cats'},
]
PETS = [
    {'id': 1, 'owner': 'Ann', 'name': 'Rex', 'image': '/pets/rex.jpg'},
    {'id': 2, 'owner': 'Cy', 'name': 'Tom', 'image': '/pets/tom.jpg'},
]


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = ['http://localhost:5173']
    PEOPLE_DIR = None
    PETS_DIR = None
    CATALOG_SOURCE = StaticCatalogSource(PEOPLE, FACTS, PETS)


class FailingSource:
    def people(self):
        return []

    def facts(self):
        raise OSError('disk on fire')

    def pets(self):
        return []


@pytest.fixture()
def source():
    return StaticCatalogSource(PEOPLE, FACTS, PETS)


@pytest.fixture()
def failing_source():
    return FailingSource()


@pytest.fixture()
def catalog(source):
    return load_catalog(source)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import funfacts.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
