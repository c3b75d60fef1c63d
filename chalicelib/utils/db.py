import functools
import os
from typing import Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from chalicelib.constants.constants import DEFAULT_TABLE_NAME, DEFAULT_DB_TIMEOUT_SECONDS, DEFAULT_REGION
from chalicelib.utils import exceptions
from chalicelib.utils.boto_clients import get_aws_config_ddb, get_dynamodb_resource
from chalicelib.utils.logger import logger, log_exception

CONDITION_FAILED_CODE = 'ConditionalCheckFailedException'
TRANSACTION_CANCELED_CODE = 'TransactionCanceledException'
CONDITION_FAILED_REASON = 'ConditionalCheckFailed'


def store_operation(func):
    """
        should be used for any atomic
        get/put/update/query call in the code,
        store errors and timeouts are not retried
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug(f'{func.__name__}:: args={args}, kwargs={kwargs}')
        try:
            result = func(*args, **kwargs)
        except ClientError as error:
            code = error.response.get('Error', {}).get('Code')
            reasons = [reason.get('Code') for reason in error.response.get('CancellationReasons', [])]
            # a canceled transaction is a conflict only if one of its conditions failed
            if code == CONDITION_FAILED_CODE or \
                    (code == TRANSACTION_CANCELED_CODE and CONDITION_FAILED_REASON in reasons):
                logger.info(f'{func.__name__}:: condition failed, {reasons=}')
                raise exceptions.ConditionFailed(reasons) from error
            log_exception(error, msg=f'Got exception while trying to {func.__name__}: ', reasons=reasons)
            raise exceptions.StoreFailure(f'{func.__name__} failed with {code}') from error
        except BotoCoreError as error:
            log_exception(error, msg=f'Got exception while trying to {func.__name__}: ')
            raise exceptions.StoreFailure(f'{func.__name__} failed: {error}') from error
        logger.info(f'{func.__name__}:: SUCCESS')
        return result

    return wrapper


def generate_update_expression(update_body: dict, allowed_attrs_to_update: list, set_on_insert: dict = None):
    """
    Generate SET expression for the allowed attributes of update_body,
    attributes of set_on_insert are written only when the item does not exist yet
    """
    set_on_insert = set_on_insert or {}
    expr_attr_names = {}
    expr_attr_values = {}
    set_parts = []
    for field in allowed_attrs_to_update:
        if field not in update_body:
            continue
        expr_attr_names[f'#{field}'] = field
        expr_attr_values[f':{field}'] = update_body[field]
        set_parts.append(f'#{field}=:{field}')

    for field, value in set_on_insert.items():
        if field in update_body:
            continue
        expr_attr_names[f'#{field}'] = field
        expr_attr_values[f':{field}'] = value
        set_parts.append(f'#{field}=if_not_exists(#{field}, :{field})')

    if not set_parts:
        return None, None, None
    return 'SET ' + ', '.join(set_parts), expr_attr_names, expr_attr_values


class Store:
    """
    Access to the documents of the general table.
    A collection is a partition (partkey), a document is addressed
    by the public identifier stored as the sortkey
    """

    def __init__(self, table_name: str = DEFAULT_TABLE_NAME, endpoint_url: str = None,
                 timeout: float = DEFAULT_DB_TIMEOUT_SECONDS, region_name: str = DEFAULT_REGION):
        self.table_name = table_name
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self.region_name = region_name
        self._table = None

    @classmethod
    def from_environ(cls):
        return cls(
            table_name=os.environ.get('GEN_TABLE_NAME', DEFAULT_TABLE_NAME),
            endpoint_url=os.environ.get('ENDPOINT_URL'),
            timeout=float(os.environ.get('DB_TIMEOUT_SECONDS', DEFAULT_DB_TIMEOUT_SECONDS)),
            region_name=os.environ.get('AWS_REGION', DEFAULT_REGION)
        )

    @property
    def table(self):
        if self._table is None:
            config = get_aws_config_ddb(timeout=self.timeout, region_name=self.region_name)
            table = get_dynamodb_resource(config, endpoint_url=self.endpoint_url).Table(self.table_name)

            table.put_item = store_operation(table.put_item)
            table.get_item = store_operation(table.get_item)
            table.update_item = store_operation(table.update_item)
            table.query = store_operation(table.query)
            self._table = table

        return self._table

    def put_db_record(self, item: dict):
        """
        Inserts a new document, an existing document with the same key is never overwritten
        """
        try:
            self.table.put_item(Item=item, ConditionExpression=Attr('partkey').not_exists())
        except exceptions.ConditionFailed:
            raise exceptions.DuplicateRecord(
                f"record partkey={item.get('partkey')} sortkey={item.get('sortkey')} already exists")

    def put_db_records(self, items: List[dict]):
        try:
            with self.table.batch_writer() as batch:
                for item in items:
                    batch.put_item(Item=item)
        except (ClientError, BotoCoreError) as error:
            log_exception(error, msg='Got exception while trying to batch_write_item: ')
            raise exceptions.StoreFailure(f'batch_write_item failed: {error}') from error
        logger.info(f'put_db_records:: SUCCESS, {len(items)} items written')

    def transact_put_records(self, items: List[dict]):
        """
        Inserts all items or none of them,
        raises ConditionFailed with per item reasons if any key already exists
        """
        transact_write_items = store_operation(self.table.meta.client.transact_write_items)
        transact_write_items(TransactItems=[
            {
                'Put': {
                    'TableName': self.table_name,
                    'Item': item,
                    'ConditionExpression': 'attribute_not_exists(partkey)'
                }
            }
            for item in items
        ])

    def find_db_item(self, partkey, sortkey) -> Optional[Dict]:
        result = self.table.get_item(
            Key={
                'partkey': partkey,
                'sortkey': sortkey
            }
        )
        return result.get('Item')

    def get_db_item(self, partkey, sortkey) -> Dict:
        item = self.find_db_item(partkey, sortkey)
        if item is None:
            logger.error(f"get_db_item ::: record partkey={partkey} sortkey={sortkey} not found")
            raise exceptions.RecordNotFound(f'record partkey={partkey} sortkey={sortkey} not found')
        return item

    def update_db_record(self, key: dict, update_body: dict, allowed_attrs_to_update: list,
                         set_on_insert: dict = None, upsert: bool = False) -> bool:
        """
        Updates the allowed attributes of a document.
        With upsert a missing document is created, otherwise RecordNotFound is raised
        :return:
        True if the document did not exist before the call
        """
        set_expr, expr_attr_names, expr_attr_values = generate_update_expression(
            update_body=update_body,
            allowed_attrs_to_update=allowed_attrs_to_update,
            set_on_insert=set_on_insert if upsert else None
        )
        if set_expr is None:
            raise exceptions.MandatoryFieldsAreNotFilled('Nothing to update')

        update_item_dict = {
            'Key': key,
            'UpdateExpression': set_expr,
            'ExpressionAttributeNames': expr_attr_names,
            'ExpressionAttributeValues': expr_attr_values,
            'ReturnValues': 'ALL_OLD'
        }
        if not upsert:
            update_item_dict['ConditionExpression'] = 'attribute_exists(partkey)'

        try:
            response = self.table.update_item(**update_item_dict)
        except exceptions.ConditionFailed:
            raise exceptions.RecordNotFound(f"record partkey={key['partkey']} sortkey={key['sortkey']} not found")
        return not response.get('Attributes')

    def query_items_paginated(self, key_condition_expression, index_name=None,
                              start_key=None) -> Tuple[List[Dict], Optional[Dict]]:
        kwargs = {'KeyConditionExpression': key_condition_expression}
        if index_name:
            kwargs.update({'IndexName': index_name})

        if start_key:
            kwargs.update({'ExclusiveStartKey': start_key})

        resp = self.table.query(**kwargs)
        return resp['Items'], resp.get('LastEvaluatedKey')

    def query_items_paged(self, key_condition_expression, index_name=None) -> List[Dict]:
        """ This method shall be used whenever you think the query will
            return more than 1mb of data at once"""
        all_items = []
        items, last_evaluated_key = self.query_items_paginated(key_condition_expression, index_name=index_name)
        all_items.extend(items)

        while last_evaluated_key is not None:
            items, last_evaluated_key = self.query_items_paginated(
                key_condition_expression,
                index_name=index_name,
                start_key=last_evaluated_key
            )
            all_items.extend(items)

        return all_items
