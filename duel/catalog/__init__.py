"""
Catalog - The card content the engine plays with.

The engine treats the catalog as an external collaborator:
- Hero templates are immutable inputs copied at selection time
- Monsters and units are rolled per location
- Equipment is sampled from a flat pool

This module contains:
- The CatalogProvider interface and its seeded implementation
- Hero templates
- Location profiles (monster pools per location)
- The equipment pool
"""

from .provider import CatalogProvider, RandomCatalog
from .heroes import HERO_TEMPLATES, get_hero_template
from .locations import LOCATION_PROFILES, LocationProfile, get_location_profile
from .equipment import EQUIPMENT_POOL

__all__ = [
    "CatalogProvider",
    "RandomCatalog",
    "HERO_TEMPLATES",
    "get_hero_template",
    "LOCATION_PROFILES",
    "LocationProfile",
    "get_location_profile",
    "EQUIPMENT_POOL",
]
