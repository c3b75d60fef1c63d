from typing import Dict, List, NamedTuple, Optional

from chalicelib.constants.constants import DEFAULT_RECORD_PER_PAGE, DEFAULT_PAGE


class PageWindow(NamedTuple):
    record_per_page: int
    page: int
    start_index: int


def _to_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def get_page_window(query_params: Optional[Dict]) -> PageWindow:
    """
    Effective window of a listing request.
    recordPerPage and page fall back to the defaults when absent or < 1,
    startIndex falls back to the beginning of the requested page when absent or invalid
    """
    query_params = query_params or {}

    record_per_page = _to_int(query_params.get('recordPerPage'))
    if record_per_page is None or record_per_page < 1:
        record_per_page = DEFAULT_RECORD_PER_PAGE

    page = _to_int(query_params.get('page'))
    if page is None or page < 1:
        page = DEFAULT_PAGE

    start_index = _to_int(query_params.get('startIndex'))
    if start_index is None or start_index < 0:
        start_index = (page - 1) * record_per_page

    return PageWindow(record_per_page=record_per_page, page=page, start_index=start_index)


def paginate(records: List[Dict], window: PageWindow, items_key: str) -> Dict:
    return {
        'total_count': len(records),
        items_key: records[window.start_index:window.start_index + window.record_per_page]
    }
