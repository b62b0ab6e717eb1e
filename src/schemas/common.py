"""Shared schema helpers.

The JSON API uses camelCase keys; Python code uses snake_case attribute names.
"""

from typing import Annotated, Any, Dict

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def dump(self) -> Dict[str, Any]:
        """Serialize to a JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


class Pagination(CamelModel):
    page: int = Field(description="Requested page, 1-based.")
    limit: int = Field(description="Requested page size.")
    total: int = Field(description="Number of rows matching the filter.")
    total_pages: int = Field(description="ceil(total / limit).")


_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    """Validate as an http(s) URL but keep the caller's spelling."""
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Input should be a valid URL")
    return value


Url = Annotated[
    str,
    StringConstraints(strip_whitespace=True),
    AfterValidator(_check_http_url),
]
