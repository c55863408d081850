from pydantic import Field

from insights_api.schemas.base import ContractName, FilterRequest


class FacilityListQuery(FilterRequest):
    classification: str | None = None
    province: str | None = None
    district: str | None = None
    town: str | None = None
    status: str | None = None
    q: str | None = None
    limit: int = Field(default=100, ge=1, le=500)
    offset: int = Field(default=0, ge=0)
    format: ContractName | None = None


class FacilityNearQuery(FilterRequest):
    limit: int = Field(default=20, ge=1, le=100)
    format: ContractName | None = None


class FacilitySearchQuery(FacilityNearQuery):
    pass
