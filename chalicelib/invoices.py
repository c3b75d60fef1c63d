from datetime import timedelta
from typing import Dict

from chalice import Response

from chalicelib.aggregations import OrderItemAggregator
from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.constants import (PAYMENT_METHODS, PAYMENT_STATUSES, PAYMENT_STATUS_PENDING,
                                            PAYMENT_METHOD_MISSING, PAYMENT_DUE_DAYS)
from chalicelib.constants.status_codes import http200
from chalicelib.orders import Order
from chalicelib.utils import app as utils_app, data as utils_data, exceptions, validators
from chalicelib.utils.db import Store
from chalicelib.utils.logger import logger


class Invoice(EntityBase):
    pk = keys_structure.invoices_pk
    sk = keys_structure.invoices_sk
    id_field = 'invoice_id'
    record_type = 'invoice'
    title = 'Invoice'

    required_immutable_fields_validation = {
        'invoice_id': validators.is_str,
        'order_id': validators.is_str,
        'payment_due_date': validators.is_iso_datetime,
        'created_at': validators.is_iso_datetime
    }

    required_mutable_fields_validation = {
        'payment_status': validators.is_one_of(*PAYMENT_STATUSES),
        'updated_at': validators.is_iso_datetime
    }

    optional_fields_validation = {
        'payment_method': validators.is_one_of(*PAYMENT_METHODS)
    }

    system_fields = ('created_at', 'updated_at', 'payment_due_date')

    def __init__(self, store, id_, **kwargs):
        EntityBase.__init__(self, store, id_, **kwargs)

        self.order_id: str = kwargs.get('order_id')
        self.payment_method: str = kwargs.get('payment_method')
        self.payment_status: str = kwargs.get('payment_status') or PAYMENT_STATUS_PENDING
        self.payment_due_date: str = kwargs.get('payment_due_date') or (
            utils_data.parse_iso(self.created_at) + timedelta(days=PAYMENT_DUE_DAYS)).isoformat(timespec='seconds')

    def _check_references(self) -> None:
        Order.init_get_by_id(self.store, self.order_id)

    @utils_app.log_start_finish
    def endpoint_get_by_id(self) -> Response:
        return Response(status_code=http200, body=compose_invoice_view(self.store, self.id_, invoice=self))

    def _to_dict(self) -> Dict:
        return {
            'invoice_id': self.id_,
            'order_id': self.order_id,
            'payment_method': self.payment_method,
            'payment_status': self.payment_status,
            'payment_due_date': self.payment_due_date,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }


def compose_invoice_view(store: Store, invoice_id: str, invoice: Invoice = None) -> Dict:
    """
    Invoice joined with the summary of its order.
    Raises RecordNotFound for a missing invoice
    and EmptyOrderAggregate when the order has no items
    """
    if invoice is None:
        invoice = Invoice.init_get_by_id(store, invoice_id)

    groups = OrderItemAggregator(store).items_by_order(invoice.order_id)
    if not groups:
        logger.error(f"compose_invoice_view ::: order {invoice.order_id} of invoice {invoice_id} has no items")
        raise exceptions.EmptyOrderAggregate(f'Order {invoice.order_id} of invoice {invoice_id} has no items')

    summary = groups[0]
    return {
        'invoice_id': invoice.id_,
        'payment_method': invoice.payment_method or PAYMENT_METHOD_MISSING,
        'order_id': invoice.order_id,
        'payment_status': invoice.payment_status,
        'payment_due_date': invoice.payment_due_date,
        'payment_due': summary['payment_due'],
        'table_number': summary['table_number'],
        'order_details': summary['order_items']
    }
