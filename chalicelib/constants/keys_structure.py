users_pk = 'users'
users_sk = '{user_id}'

users_email_pk = 'users_email'
users_email_sk = '{email}'

users_phone_pk = 'users_phone'
users_phone_sk = '{phone}'

menus_pk = 'menus'
menus_sk = '{menu_id}'

foods_pk = 'foods'
foods_sk = '{food_id}'

tables_pk = 'tables'
tables_sk = '{table_id}'

orders_pk = 'orders'
orders_sk = '{order_id}'

order_items_pk = 'order_items'
order_items_sk = '{order_item_id}'

invoices_pk = 'invoices'
invoices_sk = '{invoice_id}'

gsi_order_items_pk = 'order_items_{order_id}'
gsi_order_items_sk = '{order_item_id}'
