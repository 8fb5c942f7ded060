from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        # upstream sends null for unknown values; treat it as absent
        if value is None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value


class LocationFilter(_WireModel):
    state: str = ""
    region: str = ""
    area: str = ""
    suburb: str = ""
    postcode: str = Field("", alias="postCode")
    include_surrounding_suburbs: bool = Field(False, alias="includeSurroundingSuburbs")


class SearchCriteria(_WireModel):
    listing_type: str = Field("Rent", alias="listingType")   # "Rent", "Sale", ...
    min_bedrooms: int = Field(0, alias="minBedrooms")
    min_bathrooms: int = Field(0, alias="minBathrooms")
    min_carspaces: int = Field(0, alias="minCarspaces")
    page_size: int = Field(200, alias="pageSize")            # owned by the fetcher
    page_number: int = Field(0, alias="pageNumber")          # owned by the fetcher
    locations: list[LocationFilter] = Field(default_factory=list)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class PropertyDetails(_WireModel):
    model_config = ConfigDict(frozen=True)

    state: str = ""
    property_type: str = Field("", alias="propertyType")
    bathrooms: float = 0.0    # 1.5 is a valid count
    bedrooms: float = 0.0
    carspaces: int = 0
    suburb: str = ""
    postcode: str = ""


class PropertyListing(_WireModel):
    model_config = ConfigDict(frozen=True)

    property_details: PropertyDetails = Field(default_factory=PropertyDetails, alias="propertyDetails")


class ListingRecord(_WireModel):
    """One element of the residential search response array."""

    model_config = ConfigDict(frozen=True)

    listing: PropertyListing = Field(default_factory=PropertyListing)

    @property
    def details(self) -> PropertyDetails:
        return self.listing.property_details
