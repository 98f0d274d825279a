import pytest

from apps.core.pagination import get_page


class TestGetPage:

    def test_default_size(self, settings):
        settings.DASHBOARD_PAGE_SIZE = 20
        page = get_page(list(range(45)), '2')
        assert page.number == 2
        assert len(page.object_list) == 20

    @pytest.mark.parametrize('raw, expected', [
        (None, 1),
        ('abc', 1),
        ('0', 1),
        ('-3', 1),
        ('99', 3),
    ])
    def test_clamps(self, raw, expected):
        assert get_page(list(range(45)), raw, per_page=20).number == expected

    def test_empty(self):
        page = get_page([], '4', per_page=10)
        assert page.number == 1
        assert list(page.object_list) == []
