"""Province edit form."""

from masterdesk.cache.models import QueryKey
from masterdesk.client.models import Province
from masterdesk.context import AppContext
from masterdesk.flows.base import RecordForm
from masterdesk.flows.loading import load_entity
from masterdesk.forms.pipeline import SubmissionPipeline
from masterdesk.forms.records import province_schema
from masterdesk.forms.session import FormSession


async def open_province_edit(ctx: AppContext, province_id: str) -> RecordForm:
    province: Province = await load_entity(ctx.cache, ctx.client.provinces.name, province_id)
    session = FormSession.from_values(province_schema(), province)
    detail_key = QueryKey.detail(ctx.client.provinces.name, province_id)
    pipeline = SubmissionPipeline(
        session,
        ctx.client.provinces,
        ctx.notifications,
        entity_id=province_id,
        cache=ctx.cache,
        on_saved=lambda _: ctx.cache.revalidate(detail_key),
        success_message="Successfully edited province data",
    )
    return RecordForm(session, pipeline)
