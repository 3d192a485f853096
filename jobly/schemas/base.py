from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RequestModel(CamelModel):
    """Request bodies accept only the camelCase names and reject anything else."""
    model_config = ConfigDict(extra="forbid", populate_by_name=False)


def decimal_to_str(value: Optional[Decimal]) -> Optional[str]:
    """Render a NUMERIC value without trailing zeros ("0.5000000000" -> "0.5")."""
    if value is None:
        return None
    return format(Decimal(value).normalize(), "f")


class DeletedResponse(BaseModel):
    deleted: str
