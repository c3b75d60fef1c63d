from typing import Tuple, Dict, List

from boto3.dynamodb.conditions import Key
from chalice import Response

from chalicelib.constants.status_codes import http200
from chalicelib.constants.substitute_keys import from_db
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, exceptions
from chalicelib.utils.data import substitute_keys
from chalicelib.utils.db import Store
from chalicelib.utils.logger import logger


class EntityBase:
    pk = None
    sk = None
    id_field = None
    record_type = ''
    title = ''

    # set by the server, never taken from a request body
    system_fields = ('created_at', 'updated_at')

    required_immutable_fields_validation = {}
    required_mutable_fields_validation = {}
    optional_fields_validation = {}

    def __init__(self, store: Store, id_: str, **kwargs):
        self.store = store
        self.id_: str = id_
        self.db_record: Dict = {}
        self.requested_fields: set = set()
        self.created_at: str = kwargs.get('created_at') or utils_data.now_iso()
        self.updated_at: str = kwargs.get('updated_at') or utils_data.now_iso()

    @classmethod
    def init_by_db_record(cls, store: Store, record: Dict):
        return cls(store, record[cls.id_field], **record)

    @classmethod
    def init_get_by_id(cls, store: Store, id_: str):
        logger.info(f"init_get_by_id ::: started, {cls.record_type=} {id_=}")
        c = cls(store, id_)
        try:
            db_record = c._get_db_item()
        except exceptions.RecordNotFound:
            raise exceptions.RecordNotFound(f'{cls.title} {id_} was not found')
        return cls.init_by_db_record(store, db_record)

    @classmethod
    def find_by_id(cls, store: Store, id_: str):
        """
        Same as init_get_by_id, but a missing record gives None
        """
        if not id_:
            return None
        c = cls(store, id_)
        db_record = store.find_db_item(*c._get_pk_sk())
        return cls.init_by_db_record(store, db_record) if db_record else None

    @classmethod
    def input_fields(cls) -> List[str]:
        validation_dict = {
            **cls.required_immutable_fields_validation,
            **cls.required_mutable_fields_validation,
            **cls.optional_fields_validation
        }
        return [key for key in validation_dict if key not in cls.system_fields and key != cls.id_field]

    @classmethod
    def filter_input(cls, request_body: Dict) -> Dict:
        return {key: value for key, value in request_body.items() if key in cls.input_fields()}

    @classmethod
    @utils_auth.authenticate_class
    def init_request_create(cls, request, context):
        logger.info("init_request_create ::: started")
        request_body = utils_data.parse_raw_body(request)
        return cls(context.store, utils_data.new_public_id(), **cls.filter_input(request_body))

    @classmethod
    @utils_auth.authenticate_class
    def init_request_update(cls, request, context, id_):
        logger.info("init_request_update ::: started")
        request_body = cls.filter_input(utils_data.parse_raw_body(request))
        c = cls(context.store, id_, **request_body)
        c.requested_fields = set(request_body.keys())
        return c

    @classmethod
    @utils_auth.authenticate_class
    def init_request_get(cls, request, context, id_):
        return cls.init_get_by_id(context.store, id_)

    @classmethod
    def get_all_records(cls, store: Store) -> List[Dict]:
        return store.query_items_paged(Key('partkey').eq(cls.pk))

    @classmethod
    @utils_auth.authenticate_class
    @utils_app.log_start_finish
    def endpoint_get_all(cls, request, context) -> Response:
        records: List[Dict] = [cls.init_by_db_record(context.store, record)._to_ui()
                               for record in cls.get_all_records(context.store)]
        logger.info(f"endpoint_get_all ::: returning {len(records)} {cls.record_type} records")
        return Response(status_code=http200, body=records)

    @utils_app.log_start_finish
    def endpoint_get_by_id(self) -> Response:
        return Response(status_code=http200, body=self._to_ui())

    @utils_app.log_start_finish
    def endpoint_create(self) -> Response:
        self._create_db_record()
        return Response(status_code=http200, body={'message': f'{self.title} successfully created', 'id': self.id_})

    @utils_app.log_start_finish
    def endpoint_update(self, upsert: bool = False) -> Response:
        upserted = self._update_db_record(upsert=upsert)
        return Response(status_code=http200, body={
            'message': f'{self.title} was successfully updated',
            'id': self.id_,
            'upserted': upserted
        })

    def _get_pk_sk(self) -> Tuple[str, str]:
        return self.pk, self.sk.format(**{self.id_field: self.id_})

    def _get_db_item(self) -> Dict:
        return self.store.get_db_item(*self._get_pk_sk())

    def _to_dict(self) -> Dict:
        """
        Should be re-implemented in each child class
        :return:
        dict of item's attributes
        """
        return {
            self.id_field: self.id_,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }

    def _init_db_record(self) -> None:
        """
        New DB record initialization
        :return:
        None
        """
        pk, sk = self._get_pk_sk()
        self.db_record = {
            'partkey': pk,
            'sortkey': sk,
            'record_type': self.record_type,
            **self._to_dict()
        }

    @staticmethod
    def _failed_fields(record: Dict, validation_dict: Dict, skip_empty: bool) -> List[str]:
        failed = []
        for key, validator_func in validation_dict.items():
            value = record.get(key)
            if skip_empty and value is None:
                continue
            if validator_func(value) is not True:
                failed.append(key)
        return failed

    def _validate_custom(self, record: Dict) -> List[str]:
        """
        Entity specific cross-field checks, returns the failing field names
        """
        return []

    def _validate_fields(self):
        """
        Validates all fields of the new record,
        raises ValidationException listing every field which is not valid
        :return:
        None
        """
        logger.info("validate_fields ::: started")
        failed = [
            *self._failed_fields(self.db_record, {
                **self.required_immutable_fields_validation,
                **self.required_mutable_fields_validation
            }, skip_empty=False),
            *self._failed_fields(self.db_record, self.optional_fields_validation, skip_empty=True),
            *self._validate_custom(self.db_record)
        ]
        if failed:
            logger.error(f"validate_fields ::: {failed=}")
            raise exceptions.ValidationException(failed)
        logger.info("validate_fields ::: finished")

    def _check_references(self) -> None:
        """
        Verifies that referenced records exist before the record is written
        """
        pass

    def _check_update_references(self, update_dict: Dict) -> None:
        pass

    def _create_db_record(self) -> None:
        """
        Creates entity db record
        :return:
        None
        """
        self._init_db_record()
        self._validate_fields()
        self._check_references()
        self.store.put_db_record(self.db_record)
        logger.info(f"_create_db_record ::: {self.record_type=} {self.id_=} successfully created")

    def _update_fields_whitelist(self) -> List:
        return [key for key in [*self.required_mutable_fields_validation.keys(),
                                *self.optional_fields_validation.keys()] if key not in self.system_fields]

    def _get_validated_update_dict(self) -> Dict:
        """
        Picks requested fields from the whitelist,
        raises ValidationException if a requested field is not valid
        :return:
        Clean dict for update
        """
        item = self._to_dict()
        whitelist = self._update_fields_whitelist()
        update_dict = {key: item[key] for key in whitelist if key in self.requested_fields}
        validation_dict = {**self.required_mutable_fields_validation, **self.optional_fields_validation}
        failed = [
            *self._failed_fields(update_dict, {key: validation_dict[key] for key in update_dict}, skip_empty=False),
            *self._validate_custom(update_dict)
        ]
        if failed:
            logger.error(f"_get_validated_update_dict ::: {failed=}")
            raise exceptions.ValidationException(failed)
        return update_dict

    def _update_db_record(self, upsert: bool = False) -> bool:
        """
        Updates entity db record, only the requested fields are changed
        :return:
        True if the record was created by the update
        """
        pk, sk = self._get_pk_sk()
        update_dict = self._get_validated_update_dict()
        self._check_update_references(update_dict)
        self.updated_at = utils_data.now_iso()
        update_dict['updated_at'] = self.updated_at
        upserted = self.store.update_db_record(
            key={'partkey': pk, 'sortkey': sk},
            update_body=update_dict,
            allowed_attrs_to_update=[*self._update_fields_whitelist(), 'updated_at'],
            set_on_insert={
                'record_type': self.record_type,
                self.id_field: self.id_,
                'created_at': self.updated_at
            },
            upsert=upsert
        )
        logger.info(f"_update_db_record ::: {self.record_type=} {self.id_=} {pk=} {sk=} "
                    f"successfully updated, {upserted=}")
        return upserted

    def _to_ui(self) -> Dict:
        item = self._to_dict()
        substitute_keys(dict_to_process=item, base_keys=from_db)
        return item

    def to_ui(self) -> Dict:
        return self._to_ui()
