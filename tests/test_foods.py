from decimal import Decimal

import pytest
from boto3.dynamodb.conditions import Key

from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200, http400, http404
from tests.utils.request_utils import make_request, create_menu, create_food

from tests.utils.fixtures import aws_credentials, store, context, client, token


@pytest.mark.parametrize('price, stored_price', [
    (9.999, Decimal('10.00')),
    (9.995, Decimal('10.00')),
    (0.125, Decimal('0.13')),
    (12, Decimal('12.00')),
])
def test_food_price_is_rounded(client, store, token, price, stored_price):
    menu_id = create_menu(client, token)
    food_id = create_food(client, token, menu_id, price=price)

    assert store.get_db_item(keys_structure.foods_pk, food_id)['price'] == stored_price
    response = make_request(client, endpoint=f'/foods/{food_id}', method='GET', token=token)
    assert response.json_body['price'] == float(stored_price)


def test_food_create_validation(client, token):
    menu_id = create_menu(client, token)
    response = make_request(client, endpoint='/foods', method='POST', token=token,
                            json_body={'name': 'X', 'price': -3, 'food_image': 'img.png', 'menu_id': menu_id})
    assert response.status_code == http400
    assert 'name' in response.json_body['message']
    assert 'price' in response.json_body['message']


@pytest.mark.parametrize('price', [1e30, 1e300])
def test_food_price_not_representable_in_cents(client, store, token, price):
    menu_id = create_menu(client, token)
    response = make_request(client, endpoint='/foods', method='POST', token=token,
                            json_body={'name': 'Caviar', 'price': price, 'food_image': 'caviar.png',
                                       'menu_id': menu_id})
    assert response.status_code == http400
    assert 'price' in response.json_body['message']
    assert store.query_items_paged(Key('partkey').eq(keys_structure.foods_pk)) == []


def test_food_create_unknown_menu(client, store, token):
    response = make_request(client, endpoint='/foods', method='POST', token=token,
                            json_body={'name': 'Soup', 'price': 5, 'food_image': 'soup.png', 'menu_id': 'no-menu'})
    assert response.status_code == http404
    assert store.query_items_paged(Key('partkey').eq(keys_structure.foods_pk)) == []


def test_food_update_menu(client, store, token):
    menu_id = create_menu(client, token)
    other_menu_id = create_menu(client, token, name='Dinner menu')
    food_id = create_food(client, token, menu_id)

    response = make_request(client, endpoint=f'/foods/{food_id}', method='PATCH', token=token,
                            json_body={'menu_id': other_menu_id, 'price': 4.445})
    assert response.status_code == http200
    stored = store.get_db_item(keys_structure.foods_pk, food_id)
    assert stored['menu_id'] == other_menu_id
    assert stored['price'] == Decimal('4.45')

    response = make_request(client, endpoint=f'/foods/{food_id}', method='PATCH', token=token,
                            json_body={'menu_id': 'no-menu'})
    assert response.status_code == http404
    assert store.get_db_item(keys_structure.foods_pk, food_id)['menu_id'] == other_menu_id


def test_foods_second_page(client, token):
    menu_id = create_menu(client, token)
    food_ids = [create_food(client, token, menu_id, name=f'Food {i}') for i in range(25)]

    response = make_request(client, endpoint='/foods', method='GET', query='recordPerPage=10&page=2', token=token)
    assert response.status_code == http200
    assert response.json_body['total_count'] == 25
    page = response.json_body['food_items']
    assert len(page) == 10
    assert [food['food_id'] for food in page] == sorted(food_ids)[10:20]


def test_foods_default_window(client, token):
    menu_id = create_menu(client, token)
    for i in range(12):
        create_food(client, token, menu_id, name=f'Food {i}')

    response = make_request(client, endpoint='/foods', method='GET', query='recordPerPage=0&page=abc', token=token)
    assert response.json_body['total_count'] == 12
    assert len(response.json_body['food_items']) == 10
