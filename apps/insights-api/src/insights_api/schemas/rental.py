from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from insights_api.schemas.base import ContractName, FilterRequest

Category = Literal["Budget", "Moderate", "Luxury", "Ultra-Luxury"]
Furnishing = Literal["Unfurnished", "Semi-furnished", "Fully furnished"]


class RentalListQuery(FilterRequest):
    q: str | None = None
    location: str | None = None
    min_price: int | None = Field(default=None, ge=0, alias="minPrice")
    max_price: int | None = Field(default=None, ge=0, alias="maxPrice")
    bedrooms: int | None = Field(default=None, ge=0, le=10)
    bathrooms: int | None = Field(default=None, ge=0, le=10)
    property_type: str | None = Field(default=None, alias="propertyType")
    category: Category | None = None
    furnished: Furnishing | None = None
    available: bool | None = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    sort_by: Literal["price", "bedrooms", "location", "createdAt"] = Field(default="price", alias="sortBy")
    sort_order: Literal["asc", "desc"] = Field(default="asc", alias="sortOrder")
    format: ContractName | None = None

    @field_validator("max_price")
    @classmethod
    def _check_price_bounds(cls, value: int | None, info: ValidationInfo) -> int | None:
        min_price = info.data.get("min_price")
        if value is not None and min_price is not None and min_price > value:
            raise ValueError("must be greater than or equal to minPrice")
        return value

    def echoed_filters(self) -> dict[str, object]:
        return self.model_dump(
            by_alias=True,
            include={
                "q",
                "location",
                "min_price",
                "max_price",
                "bedrooms",
                "bathrooms",
                "property_type",
                "category",
                "furnished",
                "available",
            },
        )


class RentalSearchQuery(FilterRequest):
    q: str | None = None
    location: str | None = None
    budget: int | None = Field(default=None, ge=0)
    bedrooms: int | None = Field(default=None, ge=0, le=10)
    features: str | None = None
    limit: int = Field(default=20, ge=1, le=50)
    format: ContractName | None = None


class RentalLocationQuery(FilterRequest):
    limit: int = Field(default=20, ge=1, le=100)
    sort_by: Literal["price", "bedrooms", "createdAt"] = Field(default="price", alias="sortBy")
    format: ContractName | None = None


class ChatTurn(BaseModel):
    role: str
    content: str


class RecommendationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    max_budget: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("maxBudget", "budget", "max_budget"),
        serialization_alias="maxBudget",
    )
    bedrooms: int | None = Field(default=None, ge=0, le=10)
    preferred_locations: list[str] = Field(default_factory=list, alias="preferredLocations")
    property_type: str | None = Field(default=None, alias="propertyType")
    furnished: Furnishing | None = None
    features: list[str] = Field(default_factory=list)
    history: list[ChatTurn] = Field(default_factory=list)

    @field_validator("preferred_locations", "features")
    @classmethod
    def _drop_blank_entries(cls, values: list[str]) -> list[str]:
        return [value.strip() for value in values if value.strip()]

    def criteria(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude={"history"}, exclude_none=True)
