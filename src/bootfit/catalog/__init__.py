"""Catalog module for bootfit.

Provides validated vehicle and item records, the raw vehicle data
transforms, and catalog loading and lookup.
"""

from .loader import (
    CatalogError,
    CatalogValidationError,
    ItemNotFoundError,
    VehicleNotFoundError,
    filter_items,
    filter_items_by_size,
    filter_vehicles,
    find_vehicle,
    load_items,
    load_vehicles,
    search_items,
    search_vehicles,
    select_items,
)
from .schemas import ItemRecord, RawVehicle, VehicleRecord
from .transforms import (
    map_irregularities,
    map_measurement_confidence,
    transform_vehicle_data,
)
from .validation import (
    ValidationIssue,
    ValidationResult,
    validate_item,
    validate_items,
    validate_vehicle,
    validate_vehicles,
)

__all__ = [
    # Records
    "ItemRecord",
    "RawVehicle",
    "VehicleRecord",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    "validate_item",
    "validate_items",
    "validate_vehicle",
    "validate_vehicles",
    # Transforms
    "map_irregularities",
    "map_measurement_confidence",
    "transform_vehicle_data",
    # Loading
    "CatalogError",
    "CatalogValidationError",
    "ItemNotFoundError",
    "VehicleNotFoundError",
    "filter_items",
    "filter_items_by_size",
    "filter_vehicles",
    "find_vehicle",
    "load_items",
    "load_vehicles",
    "search_items",
    "search_vehicles",
    "select_items",
]
