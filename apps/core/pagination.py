from django.conf import settings
from django.core.paginator import Paginator


def get_page(queryset, page_number, per_page=None):
    """
    Paginate a queryset, clamping bad or out-of-range page numbers.

    Args:
        queryset: QuerySet (or list) to paginate
        page_number: raw page value from the query string
        per_page: items per page (DASHBOARD_PAGE_SIZE by default)

    Returns:
        Page object
    """
    paginator = Paginator(queryset, per_page or settings.DASHBOARD_PAGE_SIZE)

    try:
        page_num = int(page_number) if page_number else 1
        if page_num < 1:
            page_num = 1
        elif page_num > paginator.num_pages and paginator.num_pages > 0:
            page_num = paginator.num_pages
    except (ValueError, TypeError):
        page_num = 1

    return paginator.get_page(page_num)
