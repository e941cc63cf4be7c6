from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PropertyDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    data_type: list[str] = Field(default_factory=list, alias="dataType")
    description: str | None = None

    @property
    def primary_type(self) -> str:
        return self.data_type[0] if self.data_type else ""

    @property
    def is_array(self) -> bool:
        return self.primary_type.endswith("[]")

    @property
    def is_date(self) -> bool:
        return self.primary_type.removesuffix("[]") == "date"


class SchemaClass(BaseModel):
    """One entry of the store's ``GET /v1/schema`` listing."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="class", min_length=1)
    description: str | None = None
    properties: list[PropertyDescriptor] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def _null_properties(cls, value: object) -> object:
        return [] if value is None else value


class CollectionDescriptor(BaseModel):
    name: str
    description: str | None = None
    count: int = Field(default=0, ge=0)
    properties: list[PropertyDescriptor] = Field(default_factory=list)


class PropertyInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    data_type: list[str] = Field(default_factory=lambda: ["string"], alias="dataType")
    description: str | None = None


class CollectionSchemaInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(alias="class")
    description: str | None = None
    properties: list[PropertyInput] = Field(default_factory=list)
