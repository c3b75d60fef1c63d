"""
Order items summary: order items of an order joined with their food,
order and table records, grouped per (order, table) with the amount to pay.

Joins are left joins, a food or a table which can not be found
still gives a line item with empty enrichment fields.
"""
from decimal import Decimal
from typing import Dict, List, Optional

from boto3.dynamodb.conditions import Key

from chalicelib.constants import keys_structure
from chalicelib.constants.constants import ORDER_ITEMS_BY_ORDER_INDEX
from chalicelib.utils.data import round_money
from chalicelib.utils.db import Store
from chalicelib.utils.logger import logger


def project_order_item(order_item: Dict, food: Optional[Dict], order: Optional[Dict],
                       table: Optional[Dict]) -> Dict:
    food, order, table = food or {}, order or {}, table or {}
    price = food.get('price')
    quantity = order_item.get('quantity')
    amount = price * quantity if price is not None and quantity is not None else None
    return {
        'amount': amount,
        'price': price,
        'food_name': food.get('name'),
        'food_image': food.get('food_image'),
        'table_number': table.get('table_number'),
        'table_id': table.get('table_id'),
        'order_id': order.get('order_id'),
        'quantity': quantity
    }


def group_order_items(line_items: List[Dict]) -> List[Dict]:
    """
    Groups projected line items by (order_id, table_id, table_number),
    groups keep the order in which they were first seen
    """
    groups: Dict[tuple, Dict] = {}
    for line_item in line_items:
        group_key = (line_item['order_id'], line_item['table_id'], line_item['table_number'])
        group = groups.setdefault(group_key, {
            'payment_due': Decimal(0),
            'total_count': 0,
            'table_number': line_item['table_number'],
            'order_items': []
        })
        if line_item['amount'] is not None:
            group['payment_due'] += line_item['amount']
        group['total_count'] += 1
        group['order_items'].append(line_item)

    for group in groups.values():
        group['payment_due'] = round_money(group['payment_due'])
    return list(groups.values())


class OrderItemAggregator:

    def __init__(self, store: Store):
        self.store = store
        self._foods: Dict[str, Optional[Dict]] = {}

    def _find(self, partkey: str, sortkey: Optional[str]) -> Optional[Dict]:
        if not sortkey:
            return None
        return self.store.find_db_item(partkey, sortkey)

    def _find_food(self, food_id: Optional[str]) -> Optional[Dict]:
        if food_id not in self._foods:
            self._foods[food_id] = self._find(keys_structure.foods_pk,
                                              food_id and keys_structure.foods_sk.format(food_id=food_id))
        return self._foods[food_id]

    def get_order_items(self, order_id: str) -> List[Dict]:
        return self.store.query_items_paged(
            Key('gsi_partkey').eq(keys_structure.gsi_order_items_pk.format(order_id=order_id)),
            index_name=ORDER_ITEMS_BY_ORDER_INDEX
        )

    def join_order_items(self, order_items: List[Dict]) -> List[Dict]:
        orders: Dict[str, Optional[Dict]] = {}
        tables: Dict[str, Optional[Dict]] = {}
        line_items = []
        for order_item in order_items:
            order_id = order_item.get('order_id')
            if order_id not in orders:
                orders[order_id] = self._find(keys_structure.orders_pk,
                                              order_id and keys_structure.orders_sk.format(order_id=order_id))
            order = orders[order_id]

            table_id = (order or {}).get('table_id')
            if table_id not in tables:
                tables[table_id] = self._find(keys_structure.tables_pk,
                                              table_id and keys_structure.tables_sk.format(table_id=table_id))

            line_items.append(project_order_item(
                order_item,
                food=self._find_food(order_item.get('food_id')),
                order=order,
                table=tables[table_id]
            ))
        return line_items

    def items_by_order(self, order_id: str) -> List[Dict]:
        """
        :return:
        list of groups with payment_due, total_count, table_number and order_items,
        empty if the order has no items
        """
        order_items = self.get_order_items(order_id)
        groups = group_order_items(self.join_order_items(order_items))
        logger.info(f"items_by_order ::: {order_id=}, {len(order_items)} items, {len(groups)} groups")
        return groups
