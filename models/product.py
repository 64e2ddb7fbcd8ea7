"""
Product Model
Defines the product schema for marketplace
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional, List

from utils.money import to_decimal, to_decimal128, to_json_number


class ProductStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Pricing:
    regular_price: Decimal
    sale_price: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    tax: Optional[Decimal] = None

    @property
    def effective_price(self) -> Decimal:
        """Price charged at checkout: the sale price when one is set"""
        if self.sale_price is not None:
            return self.sale_price
        return self.regular_price

    def to_dict(self) -> dict:
        return {
            'regular_price': to_decimal128(self.regular_price),
            'sale_price': to_decimal128(self.sale_price) if self.sale_price is not None else None,
            'discount': to_decimal128(self.discount) if self.discount is not None else None,
            'tax': to_decimal128(self.tax) if self.tax is not None else None,
        }

    def to_public_dict(self) -> dict:
        return {
            'regularPrice': to_json_number(self.regular_price),
            'salePrice': to_json_number(self.sale_price) if self.sale_price is not None else None,
            'discount': to_json_number(self.discount) if self.discount is not None else None,
            'tax': to_json_number(self.tax) if self.tax is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Pricing':
        def optional(key):
            value = data.get(key)
            return to_decimal(value) if value is not None else None

        return cls(
            regular_price=to_decimal(data.get('regular_price', 0)),
            sale_price=optional('sale_price'),
            discount=optional('discount'),
            tax=optional('tax'),
        )


@dataclass
class Product:
    """Product document model for MongoDB"""
    name: str
    slug: str
    description: str
    category_id: str
    seller_id: str  # Reference to user _id
    pricing: Pricing
    highlights: List[str] = field(default_factory=list)
    specifications: dict = field(default_factory=dict)
    brand: Optional[str] = None
    sku: Optional[str] = None
    stock: int = 0
    low_stock_threshold: int = 5
    images: List[dict] = field(default_factory=list)  # {url, alt, is_primary}
    shipping: dict = field(default_factory=dict)
    status: ProductStatus = ProductStatus.DRAFT
    rating_average: float = 0.0
    rating_count: int = 0
    views: int = 0
    sales_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for MongoDB storage"""
        return {
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'category_id': self.category_id,
            'seller_id': self.seller_id,
            'pricing': self.pricing.to_dict(),
            'highlights': self.highlights,
            'specifications': self.specifications,
            'brand': self.brand,
            'inventory': {
                'sku': self.sku,
                'stock': self.stock,
                'low_stock_threshold': self.low_stock_threshold,
            },
            'images': self.images,
            'shipping': self.shipping,
            'status': self.status.value,
            'ratings': {'average': self.rating_average, 'count': self.rating_count},
            'views': self.views,
            'sales_count': self.sales_count,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def to_public_dict(self) -> dict:
        """Return public product info"""
        return {
            '_id': self._id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'categoryId': self.category_id,
            'sellerId': self.seller_id,
            'pricing': self.pricing.to_public_dict(),
            'highlights': self.highlights,
            'specifications': self.specifications,
            'brand': self.brand,
            'inventory': {
                'sku': self.sku,
                'stock': self.stock,
                'lowStockThreshold': self.low_stock_threshold,
            },
            'images': self.images,
            'shipping': self.shipping,
            'status': self.status.value,
            'ratings': {'average': self.rating_average, 'count': self.rating_count},
            'views': self.views,
            'salesCount': self.sales_count,
            'inStock': self.stock > 0,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Product':
        """Create Product instance from MongoDB document"""
        inventory = data.get('inventory') or {}
        ratings = data.get('ratings') or {}
        return cls(
            _id=str(data.get('_id')) if data.get('_id') else None,
            name=data.get('name', ''),
            slug=data.get('slug', ''),
            description=data.get('description', ''),
            category_id=data.get('category_id', ''),
            seller_id=data.get('seller_id', ''),
            pricing=Pricing.from_dict(data.get('pricing') or {}),
            highlights=data.get('highlights', []),
            specifications=data.get('specifications', {}),
            brand=data.get('brand'),
            sku=inventory.get('sku'),
            stock=int(inventory.get('stock', 0)),
            low_stock_threshold=int(inventory.get('low_stock_threshold', 5)),
            images=data.get('images', []),
            shipping=data.get('shipping', {}),
            status=ProductStatus(data.get('status', ProductStatus.DRAFT.value)),
            rating_average=float(ratings.get('average', 0)),
            rating_count=int(ratings.get('count', 0)),
            views=int(data.get('views', 0)),
            sales_count=int(data.get('sales_count', 0)),
            created_at=data.get('created_at', datetime.now(timezone.utc)),
            updated_at=data.get('updated_at', datetime.now(timezone.utc)),
        )
