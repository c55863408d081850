from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

ContractName = Literal["map-marker", "geo-feature", "flat", "google-maps", "geojson", "raw"]


class FilterRequest(BaseModel):
    """Typed view of loosely-typed request parameters.

    Unknown parameters are rejected and blank values count as unsupplied.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            cleaned[key] = value
        return cleaned


class FormatQuery(FilterRequest):
    format: ContractName | None = None
