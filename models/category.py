"""
Category Model
Hierarchical product categories
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Category:
    """Category document model for MongoDB"""
    name: str
    slug: str
    description: str = ''
    image: Optional[str] = None
    parent_id: Optional[str] = None
    level: int = 0  # 0 for root categories, parent level + 1 otherwise
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'image': self.image,
            'parent_id': self.parent_id,
            'level': self.level,
            'is_active': self.is_active,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }

    def to_public_dict(self) -> dict:
        return {
            '_id': self._id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'image': self.image,
            'parentId': self.parent_id,
            'level': self.level,
            'isActive': self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Category':
        return cls(
            _id=str(data.get('_id')) if data.get('_id') else None,
            name=data.get('name', ''),
            slug=data.get('slug', ''),
            description=data.get('description', ''),
            image=data.get('image'),
            parent_id=data.get('parent_id'),
            level=int(data.get('level', 0)),
            is_active=data.get('is_active', True),
            created_at=data.get('created_at', datetime.now(timezone.utc)),
            updated_at=data.get('updated_at', datetime.now(timezone.utc)),
        )
