from decimal import Decimal

PAYMENT_STATUS_PENDING = 'PENDING'
PAYMENT_STATUS_PAID = 'PAID'
PAYMENT_STATUSES = (PAYMENT_STATUS_PENDING, PAYMENT_STATUS_PAID)
PAYMENT_METHODS = ('CARD', 'CASH')
PAYMENT_METHOD_MISSING = 'null'
PAYMENT_DUE_DAYS = 1

MONEY_QUANTUM = Decimal('1.00')

DEFAULT_RECORD_PER_PAGE = 10
DEFAULT_PAGE = 1

DEFAULT_TABLE_NAME = 'restaurant-management'
DEFAULT_REGION = 'eu-central-1'
DEFAULT_DB_TIMEOUT_SECONDS = 100

ACCESS_TOKEN_TTL_HOURS = 4
REFRESH_TOKEN_TTL_HOURS = 8
TOKEN_HEADER = 'token'

ORDER_ITEMS_BY_ORDER_INDEX = 'order_items_by_order-index'
