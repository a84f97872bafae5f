from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator


class Frame(BaseModel):
    """Catalog frame.

    The catalog endpoint names the product code and display name
    ``frame_id`` / ``frame_name``; the distribution endpoints use
    ``product_id`` / ``name``. Both spellings load into the same fields.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    id: int | None = None
    product_id: str = Field(validation_alias=AliasChoices("product_id", "frame_id"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "frame_name"))
    price: Decimal = Decimal("0")
    brand: str = ""
    frame_type: str = ""
    color: str = ""
    material: str = ""


class FrameWrite(BaseModel):
    model_config = ConfigDict(extra="allow")

    product_id: str
    name: str
    price: Decimal
    brand: str = ""
    frame_type: str = ""
    color: str = ""
    material: str = ""

    @field_serializer("price", when_used="json")
    def _price_as_number(self, value: Decimal) -> float:
        return float(value)


class ChoiceOption(BaseModel):
    value: str
    label: str


class FrameChoices(BaseModel):
    model_config = ConfigDict(extra="allow")

    frame_types: list[ChoiceOption] = Field(default_factory=list)
    colors: list[ChoiceOption] = Field(default_factory=list)
    materials: list[ChoiceOption] = Field(default_factory=list)
    brands: list[ChoiceOption] = Field(default_factory=list)

    @field_validator("frame_types", "colors", "materials", "brands", mode="before")
    @classmethod
    def _plain_strings(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"value": item, "label": item} if isinstance(item, str) else item for item in value]
        return value


class FrameCsvUploadResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    created: int = 0
    updated: int = 0
    total_processed: int = 0
    errors: list[str] = Field(default_factory=list)
    error_count: int = 0
    error: str | None = None

    @property
    def should_refresh(self) -> bool:
        return self.success and self.total_processed > 0
