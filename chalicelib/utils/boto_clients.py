import os

import boto3

from botocore.config import Config

from chalicelib.constants.constants import DEFAULT_REGION, DEFAULT_DB_TIMEOUT_SECONDS

main_boto_region = os.environ.get('AWS_REGION', DEFAULT_REGION)


def get_aws_config_ddb(timeout: float = DEFAULT_DB_TIMEOUT_SECONDS, region_name: str = main_boto_region) -> Config:
    # A single attempt per operation: a timeout or a store error is reported to the caller as is
    return Config(
        retries={'total_max_attempts': 1, 'mode': 'standard'},
        connect_timeout=timeout,
        read_timeout=timeout,
        region_name=region_name
    )


def get_dynamodb_resource(config: Config, endpoint_url: str = None):
    # DynamoDB Resource.
    # Resources represent an object-oriented interface to AWS services.
    if endpoint_url:
        return boto3.resource('dynamodb', endpoint_url=endpoint_url, config=config)
    return boto3.resource('dynamodb', config=config)
