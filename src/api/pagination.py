from math import ceil
from typing import Any

from django.db.models import QuerySet


def _positive_int(source, key: str, default: int) -> int:
    try:
        value = int(source.get(key))
    except (TypeError, ValueError):
        value = default
    return max(1, value)


class Paginator:
    """
    Page-based paginator for the admin listings.

        paginator = Paginator(default_page_size=20, max_page_size=100)
        items, meta = paginator.paginate_queryset(qs, request)
    """

    def __init__(self, *, page_param: str = "page", page_size_param: str = "page_size", default_page_size: int = 20,
                 max_page_size: int = 100,):
        self.page_param = page_param
        self.page_size_param = page_size_param
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def paginate_queryset(self, data: QuerySet | list, request) -> tuple[list[Any], dict[str, Any]]:
        page = _positive_int(request.GET, self.page_param, 1)
        size = min(self.max_page_size, _positive_int(request.GET, self.page_size_param, self.default_page_size))

        total = data.count() if isinstance(data, QuerySet) else len(data)
        start = (page - 1) * size
        page_items = list(data[start:start + size])

        total_pages = max(1, ceil(total / size))
        return page_items, {
            "count": total,
            "page": page,
            "page_size": size,
            "total_pages": total_pages,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        }
