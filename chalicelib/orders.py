from typing import Dict

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.tables import Table
from chalicelib.utils import data as utils_data, validators
from chalicelib.utils.logger import logger


class Order(EntityBase):
    pk = keys_structure.orders_pk
    sk = keys_structure.orders_sk
    id_field = 'order_id'
    record_type = 'order'
    title = 'Order'

    required_immutable_fields_validation = {
        'order_id': validators.is_str,
        'created_at': validators.is_iso_datetime
    }

    required_mutable_fields_validation = {
        'order_date': validators.is_iso_datetime,
        'updated_at': validators.is_iso_datetime
    }

    optional_fields_validation = {
        'table_id': validators.is_str
    }

    def __init__(self, store, id_, **kwargs):
        EntityBase.__init__(self, store, id_, **kwargs)

        self.order_date: str = kwargs.get('order_date') or utils_data.now_iso()
        self.table_id: str = kwargs.get('table_id')

    @classmethod
    def create_for_order_items(cls, store, order_id, table_id=None):
        """
        Creates the parent order of a batch of order items,
        the order id is reserved by the caller before the items are validated
        :return:
        created Order
        """
        order = cls(store, order_id, table_id=table_id)
        order._create_db_record()
        logger.info(f"create_for_order_items ::: order {order.id_} created for {table_id=}")
        return order

    def _check_references(self) -> None:
        if self.table_id is not None:
            Table.init_get_by_id(self.store, self.table_id)

    def _check_update_references(self, update_dict: Dict) -> None:
        if 'table_id' in update_dict:
            Table.init_get_by_id(self.store, update_dict['table_id'])

    def _to_dict(self) -> Dict:
        return {
            'order_id': self.id_,
            'order_date': self.order_date,
            'table_id': self.table_id,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
