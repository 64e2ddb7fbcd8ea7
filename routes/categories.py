"""
Categories Routes
Thin listing/creation for the category tree
"""

from __future__ import annotations

from bson import ObjectId
from bson.errors import InvalidId
from flask import Blueprint, current_app, jsonify, request
from pymongo.errors import DuplicateKeyError

from models.category import Category
from routes.auth import require_admin
from utils.errors import Conflict, NotFound, ServiceUnavailable, ValidationError
from utils.validators import validate_required_fields, validate_slug

categories_bp = Blueprint('categories', __name__, url_prefix='/api/categories')


def _get_categories_collection():
    """Get MongoDB categories collection"""
    categories = current_app.config.get('db_categories')
    if categories is None:
        raise ServiceUnavailable()
    return categories


@categories_bp.route('/', methods=['GET'])
def list_categories():
    """List active categories, roots first"""
    cursor = _get_categories_collection().find({'is_active': True}).sort([('level', 1), ('name', 1)])
    categories = [Category.from_dict(doc).to_public_dict() for doc in cursor]
    return jsonify({'ok': True, 'categories': categories})


@categories_bp.route('/', methods=['POST'])
@require_admin
def create_category():
    """
    Create a category
    Required: name, slug. Optional: description, image, parent_id
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        raise ValidationError('No data provided')

    is_valid, missing = validate_required_fields(data, ['name', 'slug'])
    if not is_valid:
        raise ValidationError('Please provide all required fields', errors=missing)

    slug = str(data['slug']).strip().lower()
    is_valid, error = validate_slug(slug)
    if not is_valid:
        raise ValidationError(error)

    categories_collection = _get_categories_collection()

    parent_id = data.get('parent_id') or None
    level = 0
    if parent_id:
        try:
            parent = categories_collection.find_one({'_id': ObjectId(str(parent_id))})
        except InvalidId:
            parent = None
        if not parent:
            raise NotFound('Parent category not found')
        parent_id = str(parent['_id'])
        level = int(parent.get('level', 0)) + 1

    category = Category(
        name=str(data['name']).strip(),
        slug=slug,
        description=str(data.get('description') or '').strip(),
        image=data.get('image'),
        parent_id=parent_id,
        level=level,
    )

    try:
        result = categories_collection.insert_one(category.to_dict())
    except DuplicateKeyError as e:
        raise Conflict('A category with this slug already exists') from e
    category._id = str(result.inserted_id)

    current_app.logger.info('Category %s created', slug)
    return jsonify({'ok': True, 'category': category.to_public_dict()}), 201
