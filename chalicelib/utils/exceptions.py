from chalicelib.constants.status_codes import http400, http401, http404, http409, http500

__all__ = ["ApiException", "NotAuthorizedException", "AuthorizationException", "RecordNotFound",
           "EmptyOrderAggregate", "DuplicateRecord", "ValidationException", "MandatoryFieldsAreNotFilled",
           "MalformedRequest", "StoreFailure", "ConditionFailed"]


class ApiException(Exception):
    STATUS_CODE = http500
    LEVEL = 'exception'


# Request exceptions
class MalformedRequest(ApiException):
    STATUS_CODE = http400
    LEVEL = 'warning'


class MandatoryFieldsAreNotFilled(ApiException):
    STATUS_CODE = http400
    LEVEL = 'warning'


# Validations exceptions
class ValidationException(ApiException):
    STATUS_CODE = http400
    LEVEL = 'warning'

    def __init__(self, failed_fields):
        self.failed_fields = list(failed_fields)
        super().__init__(f'Validation error occurred while validating fields={self.failed_fields}')


# Auth exceptions
class NotAuthorizedException(ApiException):
    STATUS_CODE = http401
    LEVEL = 'warning'


class AuthorizationException(ApiException):
    STATUS_CODE = http401
    LEVEL = 'warning'


# DynamoDB exceptions
class RecordNotFound(ApiException):
    STATUS_CODE = http404
    LEVEL = 'warning'


class EmptyOrderAggregate(RecordNotFound):
    pass


class DuplicateRecord(ApiException):
    STATUS_CODE = http409
    LEVEL = 'warning'


class ConditionFailed(ApiException):

    def __init__(self, reasons=None):
        self.reasons = reasons or []
        super().__init__(f'Store condition check failed, reasons={self.reasons}')


class StoreFailure(ApiException):
    LEVEL = 'error'
