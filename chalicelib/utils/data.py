import json
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from uuid import uuid4

from chalicelib.constants.constants import MONEY_QUANTUM
from chalicelib.utils import exceptions


def replace_dict_key(item, orig_key, new_key):
    if orig_key in item:
        if new_key not in item:
            item[new_key] = item[orig_key]
        del item[orig_key]


def substitute_keys(dict_to_process: dict, base_keys: dict, opt_dict=None):
    if opt_dict is None:
        opt_dict = {}
    all_keys = {**base_keys, **opt_dict}
    for key, val in all_keys.items():
        if val:
            replace_dict_key(dict_to_process, key, val)
        elif key in dict_to_process.keys():
            dict_to_process.pop(key, None)


def parse_raw_body(chalice_request):
    request_raw_body = chalice_request.raw_body
    if not request_raw_body:
        return {}
    try:
        item = json.loads(request_raw_body, parse_float=Decimal)
    except ValueError as error:
        raise exceptions.MalformedRequest(f'Request body is not a valid JSON: {error}')
    if not isinstance(item, dict):
        raise exceptions.MalformedRequest('Request body must be a JSON object')
    return fix_values_from_ui(item)


def fix_values_from_ui(item):
    """
    Remove keys with empty or None values,
    floats are already parsed to Decimal
    """
    if item.get('_values_from_ui_strategy') == 'delete_empty':
        list_to_cleanup = ['', None]
    else:
        list_to_cleanup = [None]
    item = cleanup_dict(item, list_to_cleanup)
    item.pop('_values_from_ui_strategy', None)
    return item


def cleanup_dict(item: dict, list_of_values: list):
    """ Remove None fields in dict with. Supports one nesting.  """

    def sub_clean(sub_item):
        return {
            key: value
            for key, value in sub_item.items()
            if value not in list_of_values
        }

    clean = {}
    for k, v in item.items():
        if isinstance(v, dict):
            nested = sub_clean(v)
            if len(nested.keys()) > 0:
                clean[k] = nested
        elif v not in list_of_values:
            clean[k] = v
    return clean


def round_money(value):
    """
    Rounds a money amount to cents, half-up.
    Non numeric values are returned as is and left to the validators,
    amounts which can not be expressed in cents give None
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return value
    amount = Decimal(str(value))
    if not amount.is_finite():
        return None
    try:
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None


def new_public_id() -> str:
    return uuid4().hex


def now_iso() -> str:
    return datetime.now().isoformat(timespec='seconds')


def parse_iso(value):
    if isinstance(value, str) and value.endswith(('Z', 'z')):
        value = value[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    # stored timestamps are naive local time
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
