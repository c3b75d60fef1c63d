from decimal import Decimal
from typing import Dict, List

from chalice import Response

from chalicelib.base_class_entity import EntityBase
from chalicelib.constants import keys_structure
from chalicelib.constants.status_codes import http200
from chalicelib.menus import Menu
from chalicelib.utils import auth as utils_auth, app as utils_app, data as utils_data, validators
from chalicelib.utils.logger import logger
from chalicelib.utils.pagination import get_page_window, paginate


class Food(EntityBase):
    pk = keys_structure.foods_pk
    sk = keys_structure.foods_sk
    id_field = 'food_id'
    record_type = 'food'
    title = 'Food'

    required_immutable_fields_validation = {
        'food_id': validators.is_str,
        'created_at': validators.is_iso_datetime
    }

    required_mutable_fields_validation = {
        'name': validators.is_str_len(2, 100),
        'price': validators.is_positive_amount,
        'food_image': validators.is_str,
        'menu_id': validators.is_str,
        'updated_at': validators.is_iso_datetime
    }

    def __init__(self, store, id_, **kwargs):
        EntityBase.__init__(self, store, id_, **kwargs)

        self.name: str = kwargs.get('name')
        self.price: Decimal = utils_data.round_money(kwargs.get('price'))
        self.food_image: str = kwargs.get('food_image')
        self.menu_id: str = kwargs.get('menu_id')

    @classmethod
    @utils_auth.authenticate_class
    @utils_app.log_start_finish
    def endpoint_get_all(cls, request, context) -> Response:
        window = get_page_window(request.query_params)
        foods: List[Dict] = [cls.init_by_db_record(context.store, record)._to_ui()
                             for record in cls.get_all_records(context.store)]
        logger.info(f"endpoint_get_all ::: {window=}, total_count={len(foods)}")
        return Response(status_code=http200, body=paginate(foods, window, 'food_items'))

    def _check_references(self) -> None:
        Menu.init_get_by_id(self.store, self.menu_id)

    def _check_update_references(self, update_dict: Dict) -> None:
        if 'menu_id' in update_dict:
            Menu.init_get_by_id(self.store, update_dict['menu_id'])

    def _to_dict(self) -> Dict:
        return {
            'food_id': self.id_,
            'name': self.name,
            'price': self.price,
            'food_image': self.food_image,
            'menu_id': self.menu_id,
            'created_at': self.created_at,
            'updated_at': self.updated_at
        }
