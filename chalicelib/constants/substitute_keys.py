# keys with a None value are removed from the processed dict
from_db = {
    'partkey': None,
    'sortkey': None,
    'record_type': None,
    'password': None,
    'gsi_partkey': None,
    'gsi_sortkey': None
}
