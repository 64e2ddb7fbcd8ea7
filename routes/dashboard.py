"""
Dashboard Routes
Seller dashboard summary computed from order line items and products
"""

from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List

from bson import ObjectId
from bson.errors import InvalidId
from flask import Blueprint, current_app, jsonify
from pymongo import DESCENDING

from models.order import Order
from models.product import ProductStatus
from routes.auth import get_current_user, require_seller
from utils.errors import ServiceUnavailable
from utils.money import to_json_number

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')

RECENT_ORDERS_LIMIT = 5


@dataclass
class SellerStats:
    total_sales: Decimal = Decimal('0')
    total_orders: int = 0
    active_products: int = 0
    total_products: int = 0
    # Whole orders, including line items of other sellers
    recent_orders: List[dict] = field(default_factory=list)

    def to_public_dict(self) -> dict:
        return {
            'totalSales': to_json_number(self.total_sales),
            'totalOrders': self.total_orders,
            'activeProducts': self.active_products,
            'totalProducts': self.total_products,
            'recentOrders': self.recent_orders,
        }


def _load_buyers(users_collection, user_ids: Iterable[str]) -> Dict[str, dict]:
    """Fetch {_id, fullName, email} for the given user ids, keyed by id"""
    object_ids = []
    for user_id in set(user_ids):
        try:
            object_ids.append(ObjectId(user_id))
        except (InvalidId, TypeError):
            continue
    if not object_ids:
        return {}

    cursor = users_collection.find(
        {'_id': {'$in': object_ids}},
        {'full_name': 1, 'email': 1},
    )
    return {
        str(doc['_id']): {
            '_id': str(doc['_id']),
            'fullName': doc.get('full_name', ''),
            'email': doc.get('email', ''),
        }
        for doc in cursor
    }


def get_seller_stats(orders_collection, products_collection, users_collection, seller_id: str) -> SellerStats:
    """
    Aggregate a seller's sales and catalog counts.

    An order counts once however many of its line items belong to the
    seller; only those line items contribute to total_sales. Sums are exact
    Decimals. recent_orders holds the five newest matching orders (later
    inserts first on equal timestamps) with the buyer attached.
    """
    stats = SellerStats()
    match = {'items.seller_id': seller_id}

    for doc in orders_collection.find(match, {'items': 1}):
        stats.total_orders += 1
        stats.total_sales += Order.from_dict(doc).seller_total(seller_id)

    stats.active_products = products_collection.count_documents(
        {'seller_id': seller_id, 'status': ProductStatus.ACTIVE.value}
    )
    stats.total_products = products_collection.count_documents({'seller_id': seller_id})

    recent_docs = list(
        orders_collection.find(match)
        .sort([('created_at', DESCENDING), ('_id', DESCENDING)])
        .limit(RECENT_ORDERS_LIMIT)
    )
    buyers = _load_buyers(users_collection, (str(doc.get('user_id', '')) for doc in recent_docs))

    for doc in recent_docs:
        order = Order.from_dict(doc).to_public_dict()
        order['user'] = buyers.get(order['userId'])
        stats.recent_orders.append(order)

    return stats


@dashboard_bp.route('/seller-stats', methods=['GET'])
@require_seller
def seller_stats():
    """Sales summary for the authenticated seller (admins see their own)"""
    config = current_app.config
    collections = [config.get('db_orders'), config.get('db_products'), config.get('db_users')]
    if any(c is None for c in collections):
        raise ServiceUnavailable()

    stats = get_seller_stats(*collections, seller_id=get_current_user()._id)
    return jsonify({'ok': True, **stats.to_public_dict()})
