"""
Order Model
Defines the order schema for marketplace checkout
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, List
from enum import Enum

from utils.money import to_decimal, to_decimal128, to_json_number


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass
class OrderItem:
    """Individual line item in an order, attributed to one seller"""
    product_id: str
    name: str
    seller_id: str
    unit_price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        return {
            'product_id': self.product_id,
            'name': self.name,
            'seller_id': self.seller_id,
            'unit_price': to_decimal128(self.unit_price),
            'quantity': self.quantity,
        }

    def to_public_dict(self) -> dict:
        return {
            'productId': self.product_id,
            'name': self.name,
            'sellerId': self.seller_id,
            'unitPrice': to_json_number(self.unit_price),
            'quantity': self.quantity,
            'lineTotal': to_json_number(self.line_total),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'OrderItem':
        return cls(
            product_id=str(data.get('product_id', '')),
            name=data.get('name', ''),
            seller_id=str(data.get('seller_id', '')),
            unit_price=to_decimal(data.get('unit_price', 0)),
            quantity=int(data.get('quantity', 0)),
        )


@dataclass
class Order:
    """Order document model for MongoDB"""
    user_id: str
    items: List[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _id: Optional[str] = None

    @property
    def total_amount(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal('0'))

    def seller_total(self, seller_id: str) -> Decimal:
        """Sum of the line items sold by one seller"""
        return sum(
            (item.line_total for item in self.items if item.seller_id == seller_id),
            Decimal('0'),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for MongoDB storage"""
        return {
            'user_id': self.user_id,
            'items': [item.to_dict() for item in self.items],
            'total_amount': to_decimal128(self.total_amount),
            'status': self.status.value,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def to_public_dict(self) -> dict:
        """Return public order info"""
        return {
            '_id': self._id,
            'userId': self.user_id,
            'items': [item.to_public_dict() for item in self.items],
            'itemCount': len(self.items),
            'totalAmount': to_json_number(self.total_amount),
            'status': self.status.value,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Order':
        """Create Order instance from MongoDB document"""
        return cls(
            _id=str(data.get('_id')) if data.get('_id') else None,
            user_id=str(data.get('user_id', '')),
            items=[OrderItem.from_dict(item) for item in data.get('items', [])],
            status=OrderStatus(data.get('status', OrderStatus.PENDING.value)),
            created_at=data.get('created_at', datetime.now(timezone.utc)),
            updated_at=data.get('updated_at', datetime.now(timezone.utc)),
        )
