"""
Constants Package - static sample catalogs for dataset generation.

Modules:
- reference: component kinds, services, positions, manufacturers
- devices: phone models and the component grid

Usage:
    from cw_generator.constants import POSITIONS, PHONE_MODELS
"""

from .devices import COMPONENTS, PHONE_MODELS
from .reference import COMPONENT_KINDS, MANUFACTURERS, POSITIONS, SERVICES

__all__ = [
    # Reference data
    "COMPONENT_KINDS",
    "SERVICES",
    "POSITIONS",
    "MANUFACTURERS",
    # Devices
    "PHONE_MODELS",
    "COMPONENTS",
]
