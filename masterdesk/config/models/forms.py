"""Form validation rule configuration.

Business floors live here rather than in code so deployments can tune them.
"""

from pydantic import BaseModel, Field


class ProductRulesConfig(BaseModel):
    """Validation floors for the product form."""

    min_price: float = Field(default=1000, description="Lowest accepted price")
    min_quantity: int = Field(default=1, description="Lowest accepted quantity")


class FormsConfig(BaseModel):
    """Per-form validation settings."""

    product: ProductRulesConfig = Field(
        default_factory=ProductRulesConfig,
        description="Product form rules",
    )
