from typing import Dict

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.utils import validators


class Table(EntityBase):
    pk = keys_structure.tables_pk
    sk = keys_structure.tables_sk
    id_field = 'table_id'
    record_type = 'table'
    title = 'Table'

    required_immutable_fields_validation = {
        'table_id': validators.is_str,
        'created_at': validators.is_iso_datetime
    }

    required_mutable_fields_validation = {
        'number_of_guests': validators.is_positive_int,
        'table_number': validators.is_positive_int,
        'updated_at': validators.is_iso_datetime
    }

    def __init__(self, store, id_, **kwargs):
        EntityBase.__init__(self, store, id_, **kwargs)

        self.number_of_guests: int = kwargs.get('number_of_guests')
        self.table_number: int = kwargs.get('table_number')

    def _to_dict(self) -> Dict:
        return {
            'table_id': self.id_,
            'number_of_guests': self.number_of_guests,
            'table_number': self.table_number,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
