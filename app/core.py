from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator
from typing import Annotated, Any, Dict, List, Optional, Tuple, Union

from .models import Product

# Non-negative JSON number; ints stay ints so prices echo back unchanged.
Price = Union[
    Annotated[StrictInt, Field(ge=0)],
    Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)],
]

# Field order here is the order failures are reported in.
FIELD_MESSAGES: Dict[str, str] = {
    "name": "Name is required and must be a non-empty string",
    "description": "Description is required and must be a non-empty string",
    "price": "Price is required and must be a non-negative number",
    "category": "Category is required and must be a non-empty string",
    "inStock": "inStock is required and must be a boolean",
}


class ProductIn(BaseModel):
    name: StrictStr
    description: StrictStr
    price: Price
    category: StrictStr
    inStock: StrictBool

    @field_validator("name", "description", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be empty or whitespace")
        return v


def parse_product(payload: Any) -> Tuple[Optional[ProductIn], List[str]]:
    """Validate a create/update body against ``ProductIn``.

    Returns the model with trimmed strings, or ``None`` and one message per
    failing field. A body that is not a JSON object counts as an empty one.
    """
    data: Dict[str, Any] = payload if isinstance(payload, dict) else {}
    try:
        return ProductIn.model_validate(data), []
    except ValidationError as e:
        failed = {err["loc"][0] for err in e.errors() if err["loc"]}
        return None, [msg for field, msg in FIELD_MESSAGES.items() if field in failed]


def validate_product(payload: Any) -> List[str]:
    """Every rule runs; the result lists all failures (empty means valid)."""
    return parse_product(payload)[1]


def _make_product(product_id: str, p: ProductIn) -> Product:
    return Product(id=product_id, **p.model_dump())
