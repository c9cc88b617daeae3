"""
Pydantic schemas for product endpoints.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


class ProductPayload(BaseModel):
    """
    Body for create and update.

    Every field is optional here so that "missing" can be reported with the
    service's own message; types are strict, so `"5"` or `true` never pass as
    numbers.
    """

    model_config = ConfigDict(extra="ignore")

    name: StrictStr | None = Field(
        default=None,
        validation_alias=AliasChoices("productName", "name"),
    )
    price: StrictInt | StrictFloat | None = None
    # Whole-number floats such as 5.0 are accepted; the service checks that.
    stock: StrictInt | StrictFloat | None = None
