from decimal import Decimal

from chalicelib.aggregations import project_order_item, group_order_items, OrderItemAggregator
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from tests.utils.request_utils import make_request, create_menu, create_food, create_table, create_order_items

from tests.utils.fixtures import aws_credentials, store, context, client, token


def line_item(order_id, table_id, table_number, amount):
    return {'order_id': order_id, 'table_id': table_id, 'table_number': table_number, 'amount': amount}


def test_project_order_item():
    projected = project_order_item(
        {'quantity': 3, 'food_id': 'f1'},
        food={'price': Decimal('2.50'), 'name': 'Tea', 'food_image': 'tea.png'},
        order={'order_id': 'o1', 'table_id': 't1'},
        table={'table_id': 't1', 'table_number': 4}
    )
    assert projected == {
        'amount': Decimal('7.50'),
        'price': Decimal('2.50'),
        'food_name': 'Tea',
        'food_image': 'tea.png',
        'table_number': 4,
        'table_id': 't1',
        'order_id': 'o1',
        'quantity': 3
    }


def test_project_order_item_missing_food():
    projected = project_order_item({'quantity': 3}, food=None, order={'order_id': 'o1'}, table=None)
    assert projected['amount'] is None
    assert projected['food_name'] is None
    assert projected['table_number'] is None
    assert projected['order_id'] == 'o1'


def test_group_order_items():
    groups = group_order_items([
        line_item('o1', 't1', 4, Decimal('19.98')),
        line_item('o2', 't2', 5, Decimal('1.00')),
        line_item('o1', 't1', 4, Decimal('18.50')),
        line_item('o1', 't1', 4, None),
        line_item('o1', 't1', 4, Decimal('0.375')),
    ])
    assert [group['table_number'] for group in groups] == [4, 5]
    assert groups[0]['total_count'] == 4
    assert groups[0]['payment_due'] == Decimal('38.86')
    assert len(groups[0]['order_items']) == 4
    assert groups[1]['payment_due'] == Decimal('1.00')
    assert set(groups[0].keys()) == {'payment_due', 'total_count', 'table_number', 'order_items'}


def test_group_order_items_empty():
    assert group_order_items([]) == []


def test_items_by_order_three_items_one_table(client, store, token):
    menu_id = create_menu(client, token)
    burger = create_food(client, token, menu_id, name='Burger', price=18.5)
    eggs = create_food(client, token, menu_id, name='Eggs', price=9.99)
    tea = create_food(client, token, menu_id, name='Tea', price=0.125)
    table_id = create_table(client, token, table_number=12)

    response = create_order_items(client, token, table_id=table_id, order_items=[
        {'food_id': eggs, 'quantity': 2, 'unit_price': 9.99},
        {'food_id': burger, 'quantity': 1, 'unit_price': 18.5},
        {'food_id': tea, 'quantity': 3, 'unit_price': 0.13}
    ])
    order_id = response.json_body['order_id']

    groups = OrderItemAggregator(store).items_by_order(order_id)
    assert len(groups) == 1
    assert groups[0]['total_count'] == 3
    assert groups[0]['table_number'] == 12
    # 2 * 9.99 + 18.50 + 3 * 0.13
    assert groups[0]['payment_due'] == Decimal('38.87')
    assert {item['food_name'] for item in groups[0]['order_items']} == {'Burger', 'Eggs', 'Tea'}
    assert {item['table_id'] for item in groups[0]['order_items']} == {table_id}

    response = make_request(client, endpoint=f'/orderItems-order/{order_id}', method='GET', token=token)
    assert response.status_code == http200
    assert response.json_body[0]['payment_due'] == 38.87
    assert response.json_body[0]['total_count'] == 3


def test_items_by_order_ignores_other_orders(client, store, token):
    menu_id = create_menu(client, token)
    food_id = create_food(client, token, menu_id, price=2)
    first = create_order_items(client, token, order_items=[{'food_id': food_id, 'quantity': 1, 'unit_price': 2}])
    create_order_items(client, token, order_items=[{'food_id': food_id, 'quantity': 5, 'unit_price': 2}])

    groups = OrderItemAggregator(store).items_by_order(first.json_body['order_id'])
    assert len(groups) == 1
    assert groups[0]['payment_due'] == Decimal('2.00')
    assert groups[0]['table_number'] is None


def test_items_by_order_empty(client, token):
    response = make_request(client, endpoint='/orderItems-order/no-order', method='GET', token=token)
    assert response.status_code == http200
    assert response.json_body == []


def test_items_by_order_missing_food(client, store, token):
    menu_id = create_menu(client, token)
    food_id = create_food(client, token, menu_id, price=3)
    response = create_order_items(client, token, order_items=[
        {'food_id': food_id, 'quantity': 2, 'unit_price': 3},
        {'food_id': food_id, 'quantity': 1, 'unit_price': 3}
    ])
    order_id = response.json_body['order_id']
    # the food of the second item disappears after the order was taken
    store.table.update_item(
        Key={'partkey': keys_structure.order_items_pk, 'sortkey': response.json_body['ids'][1]},
        UpdateExpression='SET food_id = :food_id',
        ExpressionAttributeValues={':food_id': 'deleted-food'}
    )

    groups = OrderItemAggregator(store).items_by_order(order_id)
    assert groups[0]['total_count'] == 2
    assert groups[0]['payment_due'] == Decimal('6.00')
    missing = [item for item in groups[0]['order_items'] if item['food_name'] is None]
    assert len(missing) == 1
    assert missing[0]['amount'] is None


def test_order_items_are_indexed_by_order(client, store, token):
    menu_id = create_menu(client, token)
    food_id = create_food(client, token, menu_id, price=4)
    response = create_order_items(client, token, order_items=[{'food_id': food_id, 'quantity': 1, 'unit_price': 4}])
    order_id, order_item_id = response.json_body['order_id'], response.json_body['ids'][0]

    record = store.get_db_item(keys_structure.order_items_pk, order_item_id)
    assert record['gsi_partkey'] == keys_structure.gsi_order_items_pk.format(order_id=order_id)
    assert record['gsi_sortkey'] == order_item_id

    response = make_request(client, endpoint=f'/orderItems/{order_item_id}', method='GET', token=token)
    assert 'gsi_partkey' not in response.json_body
    assert 'gsi_sortkey' not in response.json_body


def test_items_by_order_reads_only_indexed_items(client, store, token):
    menu_id = create_menu(client, token)
    food_id = create_food(client, token, menu_id, price=4)
    response = create_order_items(client, token, order_items=[{'food_id': food_id, 'quantity': 1, 'unit_price': 4}])
    order_id = response.json_body['order_id']
    # same order_id but without index keys
    store.put_db_record({'partkey': keys_structure.order_items_pk, 'sortkey': 'unindexed', 'order_id': order_id,
                         'food_id': food_id, 'quantity': 10, 'unit_price': Decimal('4.00')})

    groups = OrderItemAggregator(store).items_by_order(order_id)
    assert groups[0]['total_count'] == 1
    assert groups[0]['payment_due'] == Decimal('4.00')
