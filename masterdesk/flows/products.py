"""Product create and edit forms."""

from masterdesk.cache.models import QueryKey
from masterdesk.client.models import Product
from masterdesk.context import AppContext
from masterdesk.flows.base import RecordForm
from masterdesk.flows.loading import load_entity
from masterdesk.forms.pipeline import SubmissionPipeline
from masterdesk.forms.records import product_schema
from masterdesk.forms.session import FormSession
from masterdesk.observability.logging import get_logger
from masterdesk.selection.selector import SearchableSelector
from masterdesk.selection.state import SelectedValue

logger = get_logger(__name__)


class ProductForm(RecordForm):
    """Product form with a searchable brand picker."""

    @property
    def brand(self) -> SearchableSelector:
        return self.selectors["brand_id"]


def open_product_create(ctx: AppContext) -> ProductForm:
    """Blank product form; resets to empty after each successful create."""
    session = FormSession.blank(product_schema(ctx.settings.forms.product))
    brand = SearchableSelector(
        ctx.cache,
        ctx.client.brands.name,
        field=session.field("brand_id"),
        debounce_seconds=ctx.debounce_seconds,
    )
    pipeline = SubmissionPipeline(
        session,
        ctx.client.products,
        ctx.notifications,
        cache=ctx.cache,
        success_message="Successfully created product data",
    )
    brand.open()
    return ProductForm(session, pipeline, {"brand_id": brand})


async def open_product_edit(ctx: AppContext, product_id: str) -> ProductForm:
    """Product form pre-filled from the stored product.

    The brand picker is seeded with the product's embedded brand name so
    the current brand renders before any brand search returns it. After a
    save the product is refetched.
    """
    product: Product = await load_entity(ctx.cache, ctx.client.products.name, product_id)
    session = FormSession.from_values(product_schema(ctx.settings.forms.product), product)
    brand = SearchableSelector(
        ctx.cache,
        ctx.client.brands.name,
        field=session.field("brand_id"),
        selected=SelectedValue(value=product.brand_id, label=product.brand_name),
        debounce_seconds=ctx.debounce_seconds,
    )
    detail_key = QueryKey.detail(ctx.client.products.name, product_id)
    pipeline = SubmissionPipeline(
        session,
        ctx.client.products,
        ctx.notifications,
        entity_id=product_id,
        cache=ctx.cache,
        on_saved=lambda _: ctx.cache.revalidate(detail_key),
        success_message="Successfully edited product data",
    )
    brand.open()
    logger.debug("product_edit_opened", product_id=product_id)
    return ProductForm(session, pipeline, {"brand_id": brand})
