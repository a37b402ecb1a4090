"""Schemas of the master-data forms."""

from masterdesk.client.models import ProductPayload, ProvincePayload
from masterdesk.config.models.forms import ProductRulesConfig
from masterdesk.forms.schema import FormSchema, Number, Reference, RequiredText


def product_schema(rules: ProductRulesConfig | None = None) -> FormSchema[ProductPayload]:
    """Product form; price and quantity floors come from configuration."""
    rules = rules or ProductRulesConfig()
    return FormSchema(
        ProductPayload,
        {
            "name": RequiredText("Product name must not be empty"),
            "brand_id": Reference("Brand must not be empty"),
            "description": RequiredText("Description must not be empty"),
            "price": Number(
                rules.min_price,
                type_message="Price must be a number and must not be empty",
                minimum_message=f"Price must be at least {rules.min_price:g}",
            ),
            "quantity": Number(
                rules.min_quantity,
                integer=True,
                type_message="Quantity must be a number and must not be empty",
                minimum_message=f"Quantity must be at least {rules.min_quantity}",
            ),
        },
    )


def province_schema() -> FormSchema[ProvincePayload]:
    return FormSchema(ProvincePayload, {"name": RequiredText("Name must not be empty")})
