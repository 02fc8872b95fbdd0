"""
Core data models for boot packing.

All modules import their value types from here so the catalog, engine and
runner agree on one vocabulary.

Classes:
    Rigidity, Severity, IrregularityType,
    OrientationConstraint, Category      — catalog enumerations
    Dimensions        — axis-aligned (length, width, height) in mm
    Item              — immutable catalog item to be packed
    Irregularity      — structural feature reducing usable boot space
    BootGeometry      — nominal boot box, opening and irregularities
    EffectiveSpace    — derived usable space and opening constraints
    Position          — back-bottom-left corner of a placed item
    PackedItem        — an item with its position and occupied dimensions
    PackingResult     — full outcome of one ``pack`` call
    PackingSummary    — counts and weight totals of a PackingResult
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


# ─────────────────────────────────────────────────────────────────────────────
# Enumerations
# ─────────────────────────────────────────────────────────────────────────────

class Rigidity(str, Enum):
    """Ordinal stiffness class; more rigid items are packed first on ties."""
    VERY_FLEXIBLE = "very_flexible"
    FLEXIBLE = "flexible"
    SEMI_RIGID = "semi_rigid"
    RIGID = "rigid"
    COMPLETELY_RIGID = "completely_rigid"

    @property
    def rank(self) -> int:
        """Sort rank: 0 for completely rigid up to 4 for very flexible."""
        return _RIGIDITY_RANK[self]


_RIGIDITY_RANK = {
    Rigidity.COMPLETELY_RIGID: 0,
    Rigidity.RIGID: 1,
    Rigidity.SEMI_RIGID: 2,
    Rigidity.FLEXIBLE: 3,
    Rigidity.VERY_FLEXIBLE: 4,
}


class Severity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"


class IrregularityType(str, Enum):
    WHEEL_WELLS = "wheel_wells"
    SPARE_TIRE_BUMP = "spare_tire_bump"
    SLOPED_FLOOR = "sloped_floor"
    NARROW_OPENING = "narrow_opening"
    SIDE_STORAGE = "side_storage"


class OrientationConstraint(str, Enum):
    ANY = "any"
    UPRIGHT_ONLY = "upright_only"
    FLAT_ONLY = "flat_only"


class Category(str, Enum):
    LUGGAGE = "luggage"
    BABY_GEAR = "baby_gear"
    SPORTS = "sports"
    SHOPPING = "shopping"
    EQUIPMENT = "equipment"
    CUSTOM = "custom"


# ─────────────────────────────────────────────────────────────────────────────
# Items
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Dimensions:
    """
    Axis-aligned extent of an item or an orientation of it.

    Attributes:
        length: Extent along the insertion axis (mm).
        width:  Extent across the boot (mm).
        height: Vertical extent (mm).
    """
    length: int
    width: int
    height: int

    @property
    def volume(self) -> int:
        return self.length * self.width * self.height

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.length, self.width, self.height)

    def to_dict(self) -> dict:
        return {"length": self.length, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, d: dict) -> "Dimensions":
        return cls(length=d["length"], width=d["width"], height=d["height"])

    def __repr__(self) -> str:
        return f"Dimensions({self.length}×{self.width}×{self.height}mm)"


@dataclass(frozen=True)
class Item:
    """
    A catalog item to be packed.

    Created by the catalog layer and never mutated by the engine; packed and
    unpacked result lists refer back to the same instance.

    Attributes:
        name:                    Display name.
        dimensions:              Nominal (uncompressed) dimensions.
        weight:                  Weight in kg.
        rigidity:                Stiffness class, used as the sort tie-break.
        category:                Catalog category.
        cabin_suitable:          May travel in the passenger cabin instead.
        compressibility:         Maximum uniform linear shrink in percent.
        stackable:               Informational only.
        orientation_constraints: Allowed rotations.
        custom_item:             Entered by the user rather than the catalog.
    """
    name: str
    dimensions: Dimensions
    weight: float
    rigidity: Rigidity = Rigidity.RIGID
    category: Category = Category.CUSTOM
    cabin_suitable: bool = False
    compressibility: int = 0
    stackable: bool = True
    orientation_constraints: OrientationConstraint = OrientationConstraint.ANY
    custom_item: bool = False

    @property
    def volume(self) -> int:
        return self.dimensions.volume

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "dimensions": self.dimensions.to_dict(),
            "weight": self.weight,
            "rigidity": self.rigidity.value,
            "category": self.category.value,
            "cabin_suitable": self.cabin_suitable,
            "compressibility": self.compressibility,
            "stackable": self.stackable,
            "orientation_constraints": self.orientation_constraints.value,
            "custom_item": self.custom_item,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Item":
        return cls(
            name=d["name"],
            dimensions=Dimensions.from_dict(d["dimensions"]),
            weight=d["weight"],
            rigidity=Rigidity(d.get("rigidity", "rigid")),
            category=Category(d.get("category", "custom")),
            cabin_suitable=d.get("cabin_suitable", False),
            compressibility=d.get("compressibility", 0),
            stackable=d.get("stackable", True),
            orientation_constraints=OrientationConstraint(
                d.get("orientation_constraints", "any")
            ),
            custom_item=d.get("custom_item", False),
        )

    def __repr__(self) -> str:
        return f"Item({self.name!r}, {self.dimensions!r}, {self.weight}kg)"


# ─────────────────────────────────────────────────────────────────────────────
# Boot geometry
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Irregularity:
    type: IrregularityType
    severity: Severity

    def to_dict(self) -> dict:
        return {"type": self.type.value, "severity": self.severity.value}

    @classmethod
    def from_dict(cls, d: dict) -> "Irregularity":
        return cls(type=IrregularityType(d["type"]), severity=Severity(d["severity"]))


@dataclass(frozen=True)
class BootGeometry:
    """
    Nominal internal box of a vehicle boot.

    Attributes:
        length, width, height: Internal dimensions (mm).
        opening_width:         Loading aperture width, if narrower than the boot.
        opening_height:        Loading aperture height, if lower than the boot.
        irregularities:        Structural features reducing usable space.
    """
    length: int
    width: int
    height: int
    opening_width: Optional[int] = None
    opening_height: Optional[int] = None
    irregularities: Tuple[Irregularity, ...] = ()

    @property
    def volume(self) -> int:
        return self.length * self.width * self.height

    def to_dict(self) -> dict:
        return {
            "length": self.length,
            "width": self.width,
            "height": self.height,
            "opening_width": self.opening_width,
            "opening_height": self.opening_height,
            "irregularities": [i.to_dict() for i in self.irregularities],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "BootGeometry":
        return cls(
            length=d["length"],
            width=d["width"],
            height=d["height"],
            opening_width=d.get("opening_width"),
            opening_height=d.get("opening_height"),
            irregularities=tuple(
                Irregularity.from_dict(i) for i in d.get("irregularities", [])
            ),
        )


@dataclass(frozen=True)
class EffectiveSpace:
    """
    Usable space derived from a BootGeometry.

    ``volume`` is the nominal volume; the efficiency factor only affects
    utilisation accounting, never the geometric feasibility test.
    """
    length: int
    width: int
    height: int
    volume: int
    efficiency_factor: float
    opening_width: Optional[int] = None
    opening_height: Optional[int] = None
    has_opening_constraints: bool = False

    @property
    def effective_volume(self) -> float:
        return self.volume * self.efficiency_factor


# ─────────────────────────────────────────────────────────────────────────────
# Results
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Position:
    """Back-bottom-left corner offset (mm); x grows from the back wall."""
    x: int
    y: int
    z: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class PackedItem:
    """
    A placed item.

    Attributes:
        item:                The original catalog item.
        position:            Back-bottom-left corner in the boot.
        orientation:         Dimensions actually occupied (rotated and
                             possibly compressed).
        compressed:          Whether compression was needed.
        compression_applied: Linear shrink used, in percent.
    """
    item: Item
    position: Position
    orientation: Dimensions
    compressed: bool = False
    compression_applied: float = 0.0

    @property
    def volume(self) -> int:
        return self.orientation.volume

    @property
    def x_max(self) -> int:
        return self.position.x + self.orientation.length

    @property
    def y_max(self) -> int:
        return self.position.y + self.orientation.width

    @property
    def z_max(self) -> int:
        return self.position.z + self.orientation.height

    def to_dict(self) -> dict:
        return {
            "item": self.item.to_dict(),
            "position": self.position.to_dict(),
            "orientation": self.orientation.to_dict(),
            "compressed": self.compressed,
            "compression_applied": self.compression_applied,
        }


@dataclass
class PackingResult:
    """Outcome of one packing call; built fresh per call."""
    packed_items: List[PackedItem] = field(default_factory=list)
    unpacked_items: List[Item] = field(default_factory=list)
    volume_utilization: float = 0.0
    boot_space_used: int = 0
    boot_space_available: float = 0.0
    cabin_overflow_suggested: List[Item] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "packed_items": [p.to_dict() for p in self.packed_items],
            "unpacked_items": [i.to_dict() for i in self.unpacked_items],
            "volume_utilization": round(self.volume_utilization, 4),
            "boot_space_used": self.boot_space_used,
            "boot_space_available": self.boot_space_available,
            "cabin_overflow_suggested": [
                i.to_dict() for i in self.cabin_overflow_suggested
            ],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class PackingSummary:
    total_items: int
    packed_count: int
    unpacked_count: int
    cabin_suitable_unpacked: int
    total_weight: float

    def to_dict(self) -> dict:
        return {
            "total_items": self.total_items,
            "packed_count": self.packed_count,
            "unpacked_count": self.unpacked_count,
            "cabin_suitable_unpacked": self.cabin_suitable_unpacked,
            "total_weight": self.total_weight,
        }
