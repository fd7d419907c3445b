"""
Modules package initialization.
One package per entity, each split into models, schemas, services and api.
"""

from app.modules import user_management
from app.modules import posts
