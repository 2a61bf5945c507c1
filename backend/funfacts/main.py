from flask import Blueprint, jsonify, current_app, send_from_directory, abort
from funfacts.catalog import get_catalog
from funfacts.services.games import CatalogLoadError
from funfacts.services.games.loaders import IMAGE_EXTENSIONS
import os

main = Blueprint('main', __name__)

def _catalog_or_error():
    try:
        return get_catalog(), None
    except CatalogLoadError as exc:
        current_app.logger.error(f"[catalog] load failed: {exc}")
        return None, (jsonify({'error': f'Server error: {exc}'}), 500)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Fun Facts game server!'})

@main.route('/api/people')
def list_people():
    catalog, error = _catalog_or_error()
    if error:
        return error
    return jsonify({'people': [p.to_dict() for p in catalog.people]})

@main.route('/api/facts')
def list_facts():
    catalog, error = _catalog_or_error()
    if error:
        return error
    return jsonify({'facts': [f.to_dict() for f in catalog.facts]})

@main.route('/api/pets')
def list_pets():
    catalog, error = _catalog_or_error()
    if error:
        return error
    return jsonify({'pets': [p.to_dict() for p in catalog.pets]})

def _send_image(directory, filename):
    if not directory or os.path.splitext(filename)[1].lower() not in IMAGE_EXTENSIONS:
        abort(404)
    # send_from_directory refuses paths escaping the directory
    return send_from_directory(os.path.abspath(directory), filename)

@main.route('/people/<path:filename>')
def people_image(filename):
    return _send_image(current_app.config.get('PEOPLE_DIR'), filename)

@main.route('/pets/<path:filename>')
def pet_image(filename):
    return _send_image(current_app.config.get('PETS_DIR'), filename)
