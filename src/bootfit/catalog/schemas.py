"""
Catalog record schemas.

Pydantic models for the vehicle and item catalogs as stored on disk
(camelCase keys) plus the raw scraped vehicle format consumed by
``bootfit.catalog.transforms``.  Records convert to the engine's frozen
dataclasses with ``to_item()`` / ``to_boot_geometry()``.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from bootfit.models import (
    BootGeometry,
    Category,
    Dimensions,
    Irregularity,
    IrregularityType,
    Item,
    OrientationConstraint,
    Rigidity,
    Severity,
)

PositiveMM = Annotated[StrictInt, Field(gt=0)]
BootMM = Annotated[StrictInt, Field(ge=200)]

MeasurementConfidence = Literal["manufacturer", "verified", "user_submitted"]


class CatalogModel(BaseModel):
    """Base for catalog records: camelCase on disk, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ----Items-----
class DimensionsRecord(CatalogModel):
    length: PositiveMM
    width: PositiveMM
    height: PositiveMM

    def to_dimensions(self) -> Dimensions:
        return Dimensions(self.length, self.width, self.height)


class ItemRecord(CatalogModel):
    name: str = Field(min_length=1)
    dimensions: DimensionsRecord
    weight: float = Field(ge=0.1, le=50)
    rigidity: Rigidity
    category: Category
    cabin_suitable: StrictBool
    compressibility: StrictInt = Field(ge=0, le=30)
    stackable: StrictBool
    orientation_constraints: OrientationConstraint
    custom_item: StrictBool

    def to_item(self) -> Item:
        return Item(
            name=self.name,
            dimensions=self.dimensions.to_dimensions(),
            weight=self.weight,
            rigidity=self.rigidity,
            category=self.category,
            cabin_suitable=self.cabin_suitable,
            compressibility=self.compressibility,
            stackable=self.stackable,
            orientation_constraints=self.orientation_constraints,
            custom_item=self.custom_item,
        )


# ----Vehicles-----
class BootMeasurements(CatalogModel):
    length: BootMM
    width: BootMM
    height: BootMM
    opening_width: Optional[PositiveMM] = None
    opening_height: Optional[PositiveMM] = None

    @model_validator(mode="after")
    def opening_within_boot(self) -> "BootMeasurements":
        if self.opening_width is not None and self.opening_width > self.width:
            raise ValueError("opening width cannot exceed internal width")
        if self.opening_height is not None and self.opening_height > self.height:
            raise ValueError("opening height cannot exceed internal height")
        return self


class IrregularityRecord(CatalogModel):
    type: IrregularityType
    severity: Severity

    def to_irregularity(self) -> Irregularity:
        return Irregularity(type=self.type, severity=self.severity)


class CabinSpace(CatalogModel):
    length: PositiveMM
    width: PositiveMM
    height: PositiveMM


class CabinOverflowSpaces(CatalogModel):
    rear_floor: Optional[CabinSpace] = None
    rear_seat_gap: Optional[CabinSpace] = None
    front_passenger_floor: Optional[CabinSpace] = None


class VehicleRecord(CatalogModel):
    make_model: str = Field(min_length=1)
    category_tags: list[str]
    boot_measurements: BootMeasurements
    boot_irregularities: list[IrregularityRecord]
    cabin_overflow_spaces: CabinOverflowSpaces = Field(default_factory=CabinOverflowSpaces)
    measurement_confidence: MeasurementConfidence
    submission_count: StrictInt = Field(ge=0)
    last_updated: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    hide: Optional[bool] = None

    @field_validator("last_updated")
    @classmethod
    def valid_calendar_date(cls, value: str) -> str:
        date.fromisoformat(value)
        return value

    def to_boot_geometry(self) -> BootGeometry:
        bm = self.boot_measurements
        return BootGeometry(
            length=bm.length,
            width=bm.width,
            height=bm.height,
            opening_width=bm.opening_width,
            opening_height=bm.opening_height,
            irregularities=tuple(i.to_irregularity() for i in self.boot_irregularities),
        )


# ----Raw vehicle data-----
class RawBootDimensions(BaseModel):
    length: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    volume_liters: Optional[float] = None


class RawOpeningDimensions(BaseModel):
    width: Optional[int] = None
    height: Optional[int] = None


class RawVehicle(BaseModel):
    """One entry of the scraped ``vehicles.json`` source (snake_case keys)."""

    make: str
    model: str
    year: str
    variant: str = ""
    boot_dimensions: RawBootDimensions
    opening_dimensions: RawOpeningDimensions = Field(default_factory=RawOpeningDimensions)
    irregularities: list[str] = Field(default_factory=list)
    cabin_overflow: dict[str, Any] = Field(default_factory=dict)
    measurement_source: str = ""
    notes: str = ""
    hide: Optional[bool] = None

    @field_validator("year", mode="before")
    @classmethod
    def year_as_text(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value

    @field_validator("variant", mode="before")
    @classmethod
    def variant_not_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def has_complete_boot(self) -> bool:
        bd = self.boot_dimensions
        return bd.length is not None and bd.width is not None and bd.height is not None
