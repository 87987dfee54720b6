from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel
from tortoise.contrib.pydantic import pydantic_model_creator

from .models import BIGINT_MAX, BIGINT_MIN, Report


class ReportDTO(BaseModel):
    id: Optional[int] = Field(
        None,
        ge=BIGINT_MIN,
        le=BIGINT_MAX,
        description="Identifier assigned by the store; null until persisted",
    )
    name: Optional[str] = Field(None, max_length=255, description="Name of the report")
    logo: Optional[str] = Field(None, description="Base64-encoded logo image")
    logo_content_type: Optional[str] = Field(None, max_length=255, description="MIME type of the logo")
    created_time: Optional[int] = Field(
        None, ge=BIGINT_MIN, le=BIGINT_MAX, description="Creation time in epoch milliseconds"
    )
    updated_time: Optional[int] = Field(
        None, ge=BIGINT_MIN, le=BIGINT_MAX, description="Last update time in epoch milliseconds"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        protected_namespaces=(),
    )


@lru_cache(maxsize=None)
def report_record_model():
    """Entity-shaped pydantic model: the persisted attributes with their own names."""
    return pydantic_model_creator(Report, name="ReportRecord")


@lru_cache(maxsize=None)
def report_records_adapter() -> TypeAdapter:
    """JSON encoder for a list of entity-shaped records."""
    return TypeAdapter(list[report_record_model()])
