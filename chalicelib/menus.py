from datetime import datetime
from typing import Dict, List

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.utils import validators, exceptions
from chalicelib.utils.data import parse_iso


def in_time_span(start: datetime, end: datetime, check: datetime) -> bool:
    return start < check and end > start


class Menu(EntityBase):
    pk = keys_structure.menus_pk
    sk = keys_structure.menus_sk
    id_field = 'menu_id'
    record_type = 'menu'
    title = 'Menu'

    required_immutable_fields_validation = {
        'menu_id': validators.is_str,
        'created_at': validators.is_iso_datetime
    }

    required_mutable_fields_validation = {
        'name': validators.is_str,
        'category': validators.is_str,
        'updated_at': validators.is_iso_datetime
    }

    optional_fields_validation = {
        'start_date': validators.is_iso_datetime,
        'end_date': validators.is_iso_datetime
    }

    def __init__(self, store, id_, **kwargs):
        EntityBase.__init__(self, store, id_, **kwargs)

        self.name: str = kwargs.get('name')
        self.category: str = kwargs.get('category')
        self.start_date: str = kwargs.get('start_date')
        self.end_date: str = kwargs.get('end_date')

    def _to_dict(self) -> Dict:
        return {
            'menu_id': self.id_,
            'name': self.name,
            'category': self.category,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }

    def _validate_custom(self, record: Dict) -> List[str]:
        has_start, has_end = record.get('start_date') is not None, record.get('end_date') is not None
        if not has_start and not has_end:
            return []
        if has_start != has_end:
            return ['start_date' if not has_start else 'end_date']
        start, end = parse_iso(record['start_date']), parse_iso(record['end_date'])
        if start is None or end is None:
            # reported by the field validators
            return []
        if end <= start:
            return ['end_date']
        return []

    def _get_validated_update_dict(self) -> Dict:
        update_dict = EntityBase._get_validated_update_dict(self)
        if 'start_date' in update_dict or 'end_date' in update_dict:
            start, end = parse_iso(update_dict.get('start_date')), parse_iso(update_dict.get('end_date'))
            if not in_time_span(start, end, datetime.now()):
                raise exceptions.ValidationException(['start_date', 'end_date'])
        return update_dict
