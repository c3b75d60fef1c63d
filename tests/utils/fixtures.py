import boto3
import pytest
from chalice.test import Client
from moto import mock_aws

import app as app_module
from chalicelib.constants.constants import ORDER_ITEMS_BY_ORDER_INDEX
from chalicelib.context import AppContext
from chalicelib.utils import auth as utils_auth
from chalicelib.utils.db import Store

TEST_TABLE_NAME = 'restaurant-management-test'
TEST_REGION = 'eu-central-1'
TEST_SECRET_KEY = 'test-secret-key'


def create_gen_table(region_name: str = TEST_REGION, table_name: str = TEST_TABLE_NAME):
    return boto3.resource('dynamodb', region_name=region_name).create_table(
        TableName=table_name,
        KeySchema=[
            {'AttributeName': 'partkey', 'KeyType': 'HASH'},
            {'AttributeName': 'sortkey', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'partkey', 'AttributeType': 'S'},
            {'AttributeName': 'sortkey', 'AttributeType': 'S'},
            {'AttributeName': 'gsi_partkey', 'AttributeType': 'S'},
            {'AttributeName': 'gsi_sortkey', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': ORDER_ITEMS_BY_ORDER_INDEX,
                'KeySchema': [
                    {'AttributeName': 'gsi_partkey', 'KeyType': 'HASH'},
                    {'AttributeName': 'gsi_sortkey', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def aws_credentials(monkeypatch):
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', TEST_REGION)


@pytest.fixture
def store(aws_credentials) -> Store:
    with mock_aws():
        create_gen_table()
        yield Store(table_name=TEST_TABLE_NAME, timeout=5, region_name=TEST_REGION)


@pytest.fixture
def context(store, monkeypatch) -> AppContext:
    app_context = AppContext(store, secret_key=TEST_SECRET_KEY)
    monkeypatch.setattr(app_module, 'context', app_context)
    return app_context


@pytest.fixture
def client(context) -> Client:
    with Client(app_module.app) as test_client:
        yield test_client


@pytest.fixture
def token(context) -> str:
    access_token, _ = utils_auth.generate_all_tokens(
        context, 'waiter@test.com', 'Test', 'Waiter', 'e5b01491e5384be38d3ca57db7fc43c1')
    return access_token
