from typing import Dict, List

from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, exceptions, validators
from chalicelib.utils.logger import logger, bind_request_id
from chalicelib.utils.pagination import get_page_window, paginate

is_password = validators.is_str_len(6, 128)

# position of the items in the sign-up transaction
UNIQUE_MARKERS = {1: 'email', 2: 'phone'}


def normalize_email(email):
    return email.strip().lower() if isinstance(email, str) else email


class User(EntityBase):
    pk = keys_structure.users_pk
    sk = keys_structure.users_sk
    id_field = 'user_id'
    record_type = 'user'
    title = 'User'

    required_immutable_fields_validation = {
        'user_id': validators.is_str,
        'email': validators.is_email,
        'phone': validators.is_str,
        'created_at': validators.is_iso_datetime
    }

    required_mutable_fields_validation = {
        'first_name': validators.is_str_len(2, 100),
        'last_name': validators.is_str_len(2, 100),
        'updated_at': validators.is_iso_datetime
    }

    optional_fields_validation = {
        'avatar': validators.is_str
    }

    def __init__(self, store, id_, **kwargs):
        EntityBase.__init__(self, store, id_, **kwargs)

        self.first_name: str = kwargs.get('first_name')
        self.last_name: str = kwargs.get('last_name')
        self.email: str = normalize_email(kwargs.get('email'))
        self.phone: str = kwargs.get('phone')
        self.avatar: str = kwargs.get('avatar')
        # plain text on sign-up, hash for users read from the store
        self.password: str = kwargs.get('password')
        self.token: str = kwargs.get('token')
        self.refresh_token: str = kwargs.get('refresh_token')

    @classmethod
    def init_request_signup(cls, request, context):
        bind_request_id(request)
        logger.info("init_request_signup ::: started")
        request_body = utils_data.parse_raw_body(request)
        return cls(context.store, utils_data.new_public_id(),
                   password=request_body.get('password'), **cls.filter_input(request_body))

    @classmethod
    @utils_auth.authenticate_class
    @utils_app.log_start_finish
    def endpoint_get_all(cls, request, context) -> Response:
        window = get_page_window(request.query_params)
        users: List[Dict] = [cls.init_by_db_record(context.store, record)._to_ui()
                             for record in cls.get_all_records(context.store)]
        logger.info(f"endpoint_get_all ::: {window=}, total_count={len(users)}")
        return Response(status_code=http200, body=paginate(users, window, 'user_items'))

    @utils_app.log_start_finish
    def endpoint_signup(self, context) -> Response:
        """
        Writes the user together with its email and phone markers,
        nothing is written if the email or the phone is already registered
        """
        self._init_db_record()
        self.db_record['password'] = self.password
        self._validate_fields()

        self.password = utils_auth.hash_password(self.password)
        self.token, self.refresh_token = utils_auth.generate_all_tokens(
            context, self.email, self.first_name, self.last_name, self.id_)
        self._init_db_record()
        self.db_record['password'] = self.password

        try:
            self.store.transact_put_records([self.db_record, *self._unique_markers()])
        except exceptions.ConditionFailed as error:
            duplicates = [field for index, field in UNIQUE_MARKERS.items()
                          if index < len(error.reasons) and error.reasons[index] == 'ConditionalCheckFailed']
            logger.warning(f"endpoint_signup ::: {duplicates=}, reasons={error.reasons}")
            duplicated = ' and '.join(duplicates) or 'email or phone'
            raise exceptions.DuplicateRecord(f'User with this {duplicated} already exists')

        logger.info(f"endpoint_signup ::: user {self.id_} successfully created")
        return Response(status_code=http200, body={'message': 'User successfully created', 'id': self.id_})

    def _unique_markers(self) -> List[Dict]:
        return [
            {
                'partkey': keys_structure.users_email_pk,
                'sortkey': keys_structure.users_email_sk.format(email=self.email),
                'record_type': 'user_email',
                'user_id': self.id_
            },
            {
                'partkey': keys_structure.users_phone_pk,
                'sortkey': keys_structure.users_phone_sk.format(phone=self.phone),
                'record_type': 'user_phone',
                'user_id': self.id_
            }
        ]

    def _validate_custom(self, record: Dict) -> List[str]:
        if 'password' in record and not is_password(record['password']):
            return ['password']
        return []

    def _to_ui(self) -> Dict:
        item = EntityBase._to_ui(self)
        # tokens are only handed out by the login
        item.pop('token', None)
        item.pop('refresh_token', None)
        return item

    def _to_dict(self) -> Dict:
        return {
            'user_id': self.id_,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'avatar': self.avatar,
            'token': self.token,
            'refresh_token': self.refresh_token,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }


@utils_app.log_start_finish
def endpoint_login(request, context) -> Response:
    """
    Checks the credentials and issues a new pair of tokens
    :return:
    user without the password, with the new tokens
    """
    bind_request_id(request)
    request_body = utils_data.parse_raw_body(request)
    email, password = normalize_email(request_body.get('email')), request_body.get('password')
    if not validators.is_str(email) or not validators.is_str(password):
        raise exceptions.MandatoryFieldsAreNotFilled('email and password are required')

    marker = context.store.find_db_item(keys_structure.users_email_pk,
                                        keys_structure.users_email_sk.format(email=email))
    user = User.find_by_id(context.store, marker.get('user_id')) if marker else None
    if user is None or not utils_auth.verify_password(password, user.password):
        logger.warning("endpoint_login ::: email or password is incorrect")
        raise exceptions.NotAuthorizedException('email or password is incorrect')

    user.token, user.refresh_token = utils_auth.generate_all_tokens(
        context, user.email, user.first_name, user.last_name, user.id_)
    user.updated_at = utils_data.now_iso()
    pk, sk = user._get_pk_sk()
    context.store.update_db_record(
        key={'partkey': pk, 'sortkey': sk},
        update_body={'token': user.token, 'refresh_token': user.refresh_token, 'updated_at': user.updated_at},
        allowed_attrs_to_update=['token', 'refresh_token', 'updated_at']
    )
    logger.info(f"endpoint_login ::: user {user.id_} logged in")
    return Response(status_code=http200, body={
        **user.to_ui(),
        'token': user.token,
        'refresh_token': user.refresh_token
    })
