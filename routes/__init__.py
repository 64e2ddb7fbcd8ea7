# Routes package initialization
# This package contains all API routes organized by functionality

from .auth import auth_bp
from .products import products_bp
from .categories import categories_bp
from .orders import orders_bp
from .dashboard import dashboard_bp

__all__ = ['auth_bp', 'products_bp', 'categories_bp', 'orders_bp', 'dashboard_bp']
