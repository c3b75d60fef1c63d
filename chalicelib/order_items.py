from decimal import Decimal
from typing import Dict, List

from chalice import Response

from chalicelib.aggregations import OrderItemAggregator
from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.foods import Food
from chalicelib.orders import Order
from chalicelib.tables import Table
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, exceptions, validators
from chalicelib.utils.logger import logger


class OrderItem(EntityBase):
    pk = keys_structure.order_items_pk
    sk = keys_structure.order_items_sk
    id_field = 'order_item_id'
    record_type = 'order_item'
    title = 'Order item'

    required_immutable_fields_validation = {
        'order_item_id': validators.is_str,
        'order_id': validators.is_str,
        'created_at': validators.is_iso_datetime
    }

    required_mutable_fields_validation = {
        'quantity': validators.is_positive_int,
        'unit_price': validators.is_positive_amount,
        'food_id': validators.is_str,
        'updated_at': validators.is_iso_datetime
    }

    # order_id is assigned by the server when the batch is created
    system_fields = ('created_at', 'updated_at', 'order_id')

    def __init__(self, store, id_, **kwargs):
        EntityBase.__init__(self, store, id_, **kwargs)

        self.quantity: int = kwargs.get('quantity')
        self.unit_price: Decimal = utils_data.round_money(kwargs.get('unit_price'))
        self.food_id: str = kwargs.get('food_id')
        self.order_id: str = kwargs.get('order_id')

    def _init_db_record(self) -> None:
        EntityBase._init_db_record(self)
        # sparse index, items of one order share a partition
        self.db_record['gsi_partkey'] = keys_structure.gsi_order_items_pk.format(order_id=self.order_id)
        self.db_record['gsi_sortkey'] = keys_structure.gsi_order_items_sk.format(order_item_id=self.id_)

    def _check_update_references(self, update_dict: Dict) -> None:
        if 'food_id' in update_dict:
            Food.init_get_by_id(self.store, update_dict['food_id'])

    def _to_dict(self) -> Dict:
        return {
            'order_item_id': self.id_,
            'quantity': self.quantity,
            'unit_price': self.unit_price,
            'food_id': self.food_id,
            'order_id': self.order_id,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }


class OrderItemPack:
    """
    A batch of order items ordered together at one table.
    Creating the pack creates their parent order first
    """

    def __init__(self, store, table_id=None, order_items=None):
        self.store = store
        self.table_id = table_id
        self.order_id: str = utils_data.new_public_id()
        self.raw_order_items: List = order_items if order_items is not None else []
        self.order_items: List[OrderItem] = []

    @classmethod
    @utils_auth.authenticate_class
    def init_request_create(cls, request, context):
        logger.info("init_request_create ::: started")
        request_body = utils_data.parse_raw_body(request)
        return cls(context.store, table_id=request_body.get('table_id'), order_items=request_body.get('order_items'))

    def _build_order_items(self) -> None:
        if not isinstance(self.raw_order_items, list) or not self.raw_order_items:
            raise exceptions.MandatoryFieldsAreNotFilled('order_items must be a non empty list')

        failed = []
        for index, raw_item in enumerate(self.raw_order_items):
            if not isinstance(raw_item, dict):
                failed.append(f'order_items[{index}]')
                continue
            order_item = OrderItem(self.store, utils_data.new_public_id(),
                                   order_id=self.order_id, **OrderItem.filter_input(raw_item))
            order_item._init_db_record()
            try:
                order_item._validate_fields()
            except exceptions.ValidationException as error:
                failed.extend(f'order_items[{index}].{field}' for field in error.failed_fields)
            self.order_items.append(order_item)
        if self.table_id is not None and not validators.is_str(self.table_id):
            failed.append('table_id')
        if failed:
            raise exceptions.ValidationException(failed)

    def _check_references(self) -> None:
        if self.table_id is not None:
            Table.init_get_by_id(self.store, self.table_id)
        for food_id in {order_item.food_id for order_item in self.order_items}:
            Food.init_get_by_id(self.store, food_id)

    @utils_app.log_start_finish
    def endpoint_create(self) -> Response:
        self._build_order_items()
        self._check_references()
        Order.create_for_order_items(self.store, self.order_id, table_id=self.table_id)
        self.store.put_db_records([order_item.db_record for order_item in self.order_items])
        logger.info(f"endpoint_create ::: {len(self.order_items)} order items created for order {self.order_id}")
        return Response(status_code=http200, body={
            'message': 'Order items successfully created',
            'order_id': self.order_id,
            'ids': [order_item.id_ for order_item in self.order_items]
        })


@utils_auth.authenticate
@utils_app.log_start_finish
def endpoint_items_by_order(request, context, order_id) -> Response:
    return Response(status_code=http200, body=OrderItemAggregator(context.store).items_by_order(order_id))
