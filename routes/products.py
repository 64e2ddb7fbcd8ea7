"""
Products Routes
Public product listing and seller product management
"""

from __future__ import annotations
import math
import re
from typing import Dict, Iterable

from bson import ObjectId
from bson.errors import InvalidId
from flask import Blueprint, current_app, jsonify, request
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from models.product import Pricing, Product, ProductStatus
from routes.auth import get_current_user, require_seller
from utils.errors import Conflict, NotFound, ServiceUnavailable, ValidationError
from utils.validators import parse_price, validate_required_fields, validate_slug

products_bp = Blueprint('products', __name__, url_prefix='/api/products')

PAGE_SIZE = 12


def _get_products_collection():
    """Get MongoDB products collection"""
    products = current_app.config.get('db_products')
    if products is None:
        raise ServiceUnavailable()
    return products


def _get_users_collection():
    """Get MongoDB users collection"""
    users = current_app.config.get('db_users')
    if users is None:
        raise ServiceUnavailable()
    return users


def _get_categories_collection():
    """Get MongoDB categories collection"""
    categories = current_app.config.get('db_categories')
    if categories is None:
        raise ServiceUnavailable()
    return categories


def _to_object_ids(ids: Iterable[str]) -> list:
    object_ids = []
    for value in set(ids):
        try:
            object_ids.append(ObjectId(value))
        except (InvalidId, TypeError):
            continue
    return object_ids


def _load_categories(category_ids: Iterable[str]) -> Dict[str, dict]:
    """Map category id -> {_id, name, slug}"""
    object_ids = _to_object_ids(category_ids)
    if not object_ids:
        return {}
    cursor = _get_categories_collection().find({'_id': {'$in': object_ids}}, {'name': 1, 'slug': 1})
    return {
        str(doc['_id']): {'_id': str(doc['_id']), 'name': doc.get('name'), 'slug': doc.get('slug')}
        for doc in cursor
    }


def _with_category(products: list) -> list:
    categories = _load_categories(p.category_id for p in products)
    items = []
    for product in products:
        item = product.to_public_dict()
        item['category'] = categories.get(product.category_id)
        items.append(item)
    return items


# Public routes

@products_bp.route('/', methods=['GET'])
def list_products():
    """List active products, optionally filtered by name keyword"""
    try:
        page = max(1, int(request.args.get('page', request.args.get('pageNumber', 1))))
    except ValueError:
        page = 1

    query = {'status': ProductStatus.ACTIVE.value}
    keyword = request.args.get('keyword', '').strip()
    if keyword:
        query['name'] = {'$regex': re.escape(keyword), '$options': 'i'}

    products_collection = _get_products_collection()
    count = products_collection.count_documents(query)
    cursor = (
        products_collection.find(query)
        .sort('created_at', -1)
        .skip(PAGE_SIZE * (page - 1))
        .limit(PAGE_SIZE)
    )
    products = [Product.from_dict(doc) for doc in cursor]

    return jsonify({
        'ok': True,
        'products': _with_category(products),
        'page': page,
        'pages': math.ceil(count / PAGE_SIZE),
    })


@products_bp.route('/<slug>', methods=['GET'])
def get_product(slug: str):
    """Get a single product by slug and count the view"""
    product_doc = _get_products_collection().find_one_and_update(
        {'slug': slug},
        {'$inc': {'views': 1}},
        return_document=ReturnDocument.AFTER,
    )
    if not product_doc:
        raise NotFound('Product not found')

    product = Product.from_dict(product_doc)
    item = _with_category([product])[0]

    seller = None
    seller_ids = _to_object_ids([product.seller_id])
    if seller_ids:
        seller_doc = _get_users_collection().find_one(
            {'_id': seller_ids[0]},
            {'full_name': 1, 'business_name': 1},
        )
        if seller_doc:
            seller = {
                '_id': str(seller_doc['_id']),
                'fullName': seller_doc.get('full_name'),
                'businessName': seller_doc.get('business_name'),
            }
    item['seller'] = seller

    return jsonify({'ok': True, 'product': item})


# Seller routes

@products_bp.route('/', methods=['POST'])
@require_seller
def create_product():
    """
    Create a product owned by the caller
    Required: name, slug, description, category_id, pricing.regular_price
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        raise ValidationError('No data provided')

    is_valid, missing = validate_required_fields(data, ['name', 'slug', 'description', 'category_id'])
    if not is_valid:
        raise ValidationError('Please provide all required fields', errors=missing)

    slug = str(data['slug']).strip().lower()
    is_valid, error = validate_slug(slug)
    if not is_valid:
        raise ValidationError(error)

    pricing_data = data.get('pricing') or {}
    if not isinstance(pricing_data, dict) or pricing_data.get('regular_price') is None:
        raise ValidationError('pricing.regular_price is required')

    prices = {}
    for key in ('regular_price', 'sale_price', 'discount', 'tax'):
        if pricing_data.get(key) is None:
            continue
        amount, error = parse_price(pricing_data[key], key)
        if error:
            raise ValidationError(error)
        prices[key] = amount

    category_ids = _to_object_ids([str(data['category_id'])])
    if not category_ids or not _get_categories_collection().find_one({'_id': category_ids[0]}, {'_id': 1}):
        raise NotFound('Category not found')

    inventory = data.get('inventory') or {}
    if not isinstance(inventory, dict):
        raise ValidationError('inventory must be an object')
    try:
        stock = int(inventory.get('stock', 0))
    except (TypeError, ValueError):
        raise ValidationError('inventory.stock must be a whole number')
    if stock < 0:
        raise ValidationError('inventory.stock must be at least 0')

    user = get_current_user()
    product = Product(
        name=str(data['name']).strip(),
        slug=slug,
        description=str(data['description']).strip(),
        category_id=str(data['category_id']),
        seller_id=user._id,
        pricing=Pricing(**prices),
        highlights=list(data.get('highlights') or []),
        specifications=dict(data.get('specifications') or {}),
        brand=data.get('brand'),
        sku=inventory.get('sku'),
        stock=stock,
        images=list(data.get('images') or []),
        shipping=dict(data.get('shipping') or {}),
        # Listed immediately, no review step
        status=ProductStatus.ACTIVE,
    )

    products_collection = _get_products_collection()
    if products_collection.find_one({'slug': slug}, {'_id': 1}):
        raise Conflict('A product with this slug already exists')
    try:
        result = products_collection.insert_one(product.to_dict())
    except DuplicateKeyError as e:
        raise Conflict('A product with this slug already exists') from e
    product._id = str(result.inserted_id)

    current_app.logger.info('Product %s created by seller %s', slug, user.email)
    return jsonify({'ok': True, 'product': product.to_public_dict()}), 201


@products_bp.route('/seller/my-products', methods=['GET'])
@require_seller
def my_products():
    """All of the caller's products regardless of status"""
    cursor = _get_products_collection().find({'seller_id': get_current_user()._id}).sort('created_at', -1)
    products = [Product.from_dict(doc).to_public_dict() for doc in cursor]
    return jsonify({'ok': True, 'products': products, 'count': len(products)})
