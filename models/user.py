"""
User Model
Defines the user schema and role management for authentication
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional


class UserRole(str, Enum):
    CUSTOMER = "customer"
    SELLER = "seller"
    ADMIN = "admin"


def role_satisfies(role: UserRole, required: Iterable[UserRole]) -> bool:
    """Admin satisfies every role requirement; other roles must be listed"""
    if role == UserRole.ADMIN:
        return True
    return role in set(required)


@dataclass
class User:
    """User document model for MongoDB"""
    full_name: str
    email: str
    phone_number: str
    password_hash: str = ''
    role: UserRole = UserRole.CUSTOMER
    # Seller business details
    business_name: Optional[str] = None
    gst_number: Optional[str] = None
    business_address: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    _id: Optional[str] = None

    def to_dict(self, include_password: bool = False) -> dict:
        """Convert to dictionary for MongoDB storage"""
        data = {
            'full_name': self.full_name,
            'email': self.email,
            'phone_number': self.phone_number,
            'role': self.role.value,
            'business_name': self.business_name,
            'gst_number': self.gst_number,
            'business_address': self.business_address,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
        if include_password:
            data['password_hash'] = self.password_hash
        return data

    def to_public_dict(self) -> dict:
        """Return public user info (no password hash)"""
        return {
            '_id': self._id,
            'fullName': self.full_name,
            'email': self.email,
            'phoneNumber': self.phone_number,
            'role': self.role.value,
            'businessName': self.business_name,
            'gstNumber': self.gst_number,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'User':
        """Create User instance from MongoDB document"""
        return cls(
            _id=str(data.get('_id')) if data.get('_id') else None,
            full_name=data.get('full_name', ''),
            email=data.get('email', ''),
            phone_number=data.get('phone_number', ''),
            password_hash=data.get('password_hash', ''),
            role=UserRole(data.get('role', UserRole.CUSTOMER.value)),
            business_name=data.get('business_name'),
            gst_number=data.get('gst_number'),
            business_address=data.get('business_address'),
            created_at=data.get('created_at', datetime.now(timezone.utc)),
            updated_at=data.get('updated_at', datetime.now(timezone.utc)),
        )
