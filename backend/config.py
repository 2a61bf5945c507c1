import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(BASE_DIR, 'funfacts.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Catalog locations; each may be overridden on its own
    CATALOG_DIR = os.environ.get('CATALOG_DIR') or os.getcwd()
    PEOPLE_DIR = os.environ.get('PEOPLE_DIR') or os.path.join(CATALOG_DIR, 'people')
    FACTS_CSV = os.environ.get('FACTS_CSV') or os.path.join(CATALOG_DIR, 'fun-facts.csv')
    PETS_CSV = os.environ.get('PETS_CSV') or os.path.join(CATALOG_DIR, 'pets.csv')
    PETS_DIR = os.environ.get('PETS_DIR') or os.path.join(CATALOG_DIR, 'pets')
    # Optional: a ready CatalogSource instance, takes precedence over the paths above
    CATALOG_SOURCE = None
    CORS_ORIGINS = [
        o.strip() for o in (os.environ.get('CORS_ORIGINS') or 'http://localhost:5173,http://127.0.0.1:5173').split(',')
        if o.strip()
    ]
