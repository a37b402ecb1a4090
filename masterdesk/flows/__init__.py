"""Record forms of the master-data screens."""

from masterdesk.flows.base import RecordForm
from masterdesk.flows.loading import load_entity
from masterdesk.flows.products import ProductForm, open_product_create, open_product_edit
from masterdesk.flows.provinces import open_province_edit

__all__ = [
    "ProductForm",
    "RecordForm",
    "load_entity",
    "open_product_create",
    "open_product_edit",
    "open_province_edit",
]
