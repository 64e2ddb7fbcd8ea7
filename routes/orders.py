"""
Orders Routes
Handles checkout and the buyer's order history
"""

from __future__ import annotations

from bson import ObjectId
from bson.errors import InvalidId
from flask import Blueprint, current_app, jsonify, request

from models.order import Order, OrderItem, OrderStatus
from models.product import Product, ProductStatus
from routes.auth import get_current_user, require_auth
from utils.errors import NotFound, ServiceUnavailable, ValidationError
from utils.validators import parse_quantity

orders_bp = Blueprint('orders', __name__, url_prefix='/api/orders')


def _get_orders_collection():
    """Get MongoDB orders collection"""
    orders = current_app.config.get('db_orders')
    if orders is None:
        raise ServiceUnavailable()
    return orders


def _get_products_collection():
    """Get MongoDB products collection"""
    products = current_app.config.get('db_products')
    if products is None:
        raise ServiceUnavailable()
    return products


@orders_bp.route('/', methods=['POST'])
@require_auth
def checkout():
    """
    Create a new order
    Expects: items (array of {product_id, quantity})
    Prices are snapshotted from the products; stock is not reserved.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('No data provided')

    items_data = data.get('items')
    if not isinstance(items_data, list) or not items_data:
        raise ValidationError('Cart is empty')

    products_collection = _get_products_collection()
    order_items = []

    for item in items_data:
        if not isinstance(item, dict):
            raise ValidationError('Each item must be an object')

        quantity, error = parse_quantity(item.get('quantity', 1))
        if error:
            raise ValidationError(error)

        product_id = str(item.get('product_id', ''))
        try:
            product_doc = products_collection.find_one({
                '_id': ObjectId(product_id),
                'status': ProductStatus.ACTIVE.value,
            })
        except InvalidId:
            product_doc = None
        if not product_doc:
            raise NotFound(f'Product not found: {product_id}')

        product = Product.from_dict(product_doc)
        order_items.append(OrderItem(
            product_id=product._id,
            name=product.name,
            seller_id=product.seller_id,
            unit_price=product.pricing.effective_price,
            quantity=quantity,
        ))

    user = get_current_user()
    order = Order(user_id=user._id, items=order_items, status=OrderStatus.PENDING)
    result = _get_orders_collection().insert_one(order.to_dict())
    order._id = str(result.inserted_id)

    current_app.logger.info('Order %s placed by %s (%d items)', order._id, user.email, len(order_items))
    return jsonify({'ok': True, 'order': order.to_public_dict()}), 201


@orders_bp.route('/my-orders', methods=['GET'])
@require_auth
def my_orders():
    """The caller's orders, newest first"""
    cursor = _get_orders_collection().find({'user_id': get_current_user()._id}).sort([
        ('created_at', -1),
        ('_id', -1),
    ])
    orders = [Order.from_dict(doc).to_public_dict() for doc in cursor]
    return jsonify({'ok': True, 'orders': orders, 'count': len(orders)})
