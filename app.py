from chalice import Chalice

from chalicelib import users, menus, foods, tables, orders, order_items, invoices
from chalicelib.context import AppContext
from chalicelib.utils import app as utils_app

app = Chalice(app_name='restaurant-management')

app.debug = True

context = AppContext.from_environ()


def is_upsert() -> bool:
    query_params = app.current_request.query_params or {}
    return str(query_params.get('upsert', '')).lower() == 'true'


@app.route('/health-check', methods=['GET'], cors=True)
def health_check():
    return {'health': 'check'}


# USERS
@app.route('/users/signup', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def signup():
    return users.User.init_request_signup(app.current_request, context).endpoint_signup(context)


@app.route('/users/login', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def login():
    return users.endpoint_login(app.current_request, context)


@app.route('/users', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_users():
    return users.User.endpoint_get_all(app.current_request, context)


@app.route('/users/{user_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_user(user_id):
    return users.User.init_request_get(app.current_request, context, user_id).endpoint_get_by_id()


@app.route('/users/{user_id}', methods=['PATCH'], cors=True)
@utils_app.request_exception_handler
def update_user(user_id):
    return users.User.init_request_update(app.current_request, context, user_id).endpoint_update(is_upsert())


# MENUS
@app.route('/menus', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_menus():
    return menus.Menu.endpoint_get_all(app.current_request, context)


@app.route('/menus', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def create_menu():
    return menus.Menu.init_request_create(app.current_request, context).endpoint_create()


@app.route('/menus/{menu_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_menu(menu_id):
    return menus.Menu.init_request_get(app.current_request, context, menu_id).endpoint_get_by_id()


@app.route('/menus/{menu_id}', methods=['PATCH'], cors=True)
@utils_app.request_exception_handler
def update_menu(menu_id):
    return menus.Menu.init_request_update(app.current_request, context, menu_id).endpoint_update(is_upsert())


# FOODS
@app.route('/foods', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_foods():
    return foods.Food.endpoint_get_all(app.current_request, context)


@app.route('/foods', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def create_food():
    return foods.Food.init_request_create(app.current_request, context).endpoint_create()


@app.route('/foods/{food_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_food(food_id):
    return foods.Food.init_request_get(app.current_request, context, food_id).endpoint_get_by_id()


@app.route('/foods/{food_id}', methods=['PATCH'], cors=True)
@utils_app.request_exception_handler
def update_food(food_id):
    return foods.Food.init_request_update(app.current_request, context, food_id).endpoint_update(is_upsert())


# TABLES
@app.route('/tables', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_tables():
    return tables.Table.endpoint_get_all(app.current_request, context)


@app.route('/tables', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def create_table():
    return tables.Table.init_request_create(app.current_request, context).endpoint_create()


@app.route('/tables/{table_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_table(table_id):
    return tables.Table.init_request_get(app.current_request, context, table_id).endpoint_get_by_id()


@app.route('/tables/{table_id}', methods=['PATCH'], cors=True)
@utils_app.request_exception_handler
def update_table(table_id):
    return tables.Table.init_request_update(app.current_request, context, table_id).endpoint_update(is_upsert())


# ORDERS
@app.route('/orders', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_orders():
    return orders.Order.endpoint_get_all(app.current_request, context)


@app.route('/orders', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def create_order():
    return orders.Order.init_request_create(app.current_request, context).endpoint_create()


@app.route('/orders/{order_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_order(order_id):
    return orders.Order.init_request_get(app.current_request, context, order_id).endpoint_get_by_id()


@app.route('/orders/{order_id}', methods=['PATCH'], cors=True)
@utils_app.request_exception_handler
def update_order(order_id):
    return orders.Order.init_request_update(app.current_request, context, order_id).endpoint_update(is_upsert())


# ORDER ITEMS
@app.route('/orderItems', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_order_items():
    return order_items.OrderItem.endpoint_get_all(app.current_request, context)


@app.route('/orderItems', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def create_order_items():
    """
    creates the order of the items as well
    """
    return order_items.OrderItemPack.init_request_create(app.current_request, context).endpoint_create()


@app.route('/orderItems/{order_item_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_order_item(order_item_id):
    return order_items.OrderItem.init_request_get(app.current_request, context, order_item_id).\
        endpoint_get_by_id()


@app.route('/orderItems/{order_item_id}', methods=['PATCH'], cors=True)
@utils_app.request_exception_handler
def update_order_item(order_item_id):
    return order_items.OrderItem.init_request_update(app.current_request, context, order_item_id).\
        endpoint_update(is_upsert())


@app.route('/orderItems-order/{order_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_order_items_by_order(order_id):
    return order_items.endpoint_items_by_order(app.current_request, context, order_id)


# INVOICES
@app.route('/invoices', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_invoices():
    return invoices.Invoice.endpoint_get_all(app.current_request, context)


@app.route('/invoices', methods=['POST'], cors=True)
@utils_app.request_exception_handler
def create_invoice():
    return invoices.Invoice.init_request_create(app.current_request, context).endpoint_create()


@app.route('/invoices/{invoice_id}', methods=['GET'], cors=True)
@utils_app.request_exception_handler
def get_invoice(invoice_id):
    return invoices.Invoice.init_request_get(app.current_request, context, invoice_id).endpoint_get_by_id()


@app.route('/invoices/{invoice_id}', methods=['PATCH'], cors=True)
@utils_app.request_exception_handler
def update_invoice(invoice_id):
    return invoices.Invoice.init_request_update(app.current_request, context, invoice_id).\
        endpoint_update(is_upsert())
