# =============================================================================
# reports/tests/test_schemas.py - JSON column shapes and tri-state updates
# =============================================================================

import pytest

from apps.reports.schemas import (
    CLEAR,
    UNCHANGED,
    AccountCreated,
    OrderInProgress,
    Set,
    apply_field_update,
    as_field_update,
    dump_items,
    parse_accounts_created,
    parse_orders_in_progress,
)


class TestLenientParsing:

    @pytest.mark.parametrize('value', [None, '', 'not json', '{"account": "x"}', 42, {'account': 'x'}])
    def test_malformed_reads_as_empty(self, value):
        assert parse_orders_in_progress(value) == []
        assert parse_accounts_created(value) == []

    def test_json_string_is_parsed(self):
        items = parse_orders_in_progress('[{"account": "acme", "deadline": "Fri", "handlerPhone": "0700"}]')
        assert items == [OrderInProgress(account='acme', deadline='Fri', handler_phone='0700')]

    def test_non_object_entries_dropped(self):
        items = parse_accounts_created(['x@mail.test', None, {'email': 'ok@mail.test'}, 7])
        assert items == [AccountCreated(email='ok@mail.test', type='seller')]

    def test_entries_without_key_field_dropped(self):
        assert parse_orders_in_progress([{'deadline': 'Fri'}, {'account': '  '}]) == []
        assert parse_accounts_created([{'type': 'buyer'}]) == []

    def test_unknown_account_type_becomes_seller(self):
        assert parse_accounts_created([{'email': 'a@mail.test', 'type': 'Reseller'}])[0].type == 'seller'
        assert parse_accounts_created([{'email': 'a@mail.test', 'type': 'BUYER'}])[0].type == 'buyer'

    def test_dump_uses_camel_case_phone(self):
        items = [OrderInProgress(account='acme', handler_phone='0700')]
        assert dump_items(items) == [{'account': 'acme', 'deadline': '', 'handlerPhone': '0700'}]

    def test_dump_empty_is_none(self):
        assert dump_items([]) is None


class TestFieldUpdates:

    def test_none_clears(self):
        assert as_field_update(None, parse_orders_in_progress) is CLEAR

    def test_list_sets(self):
        update = as_field_update([{'account': 'acme'}, 'junk'], parse_orders_in_progress)
        assert update == Set((OrderInProgress(account='acme'),))

    def test_markers_pass_through(self):
        assert as_field_update(UNCHANGED, parse_orders_in_progress) is UNCHANGED
        assert as_field_update(CLEAR, parse_orders_in_progress) is CLEAR

    def test_apply(self):
        stored = [{'email': 'old@mail.test', 'type': 'seller'}]
        assert apply_field_update(stored, UNCHANGED) == stored
        assert apply_field_update(stored, CLEAR) is None
        assert apply_field_update(stored, Set(())) is None
        assert apply_field_update(stored, Set((AccountCreated(email='new@mail.test', type='buyer'),))) == [
            {'email': 'new@mail.test', 'type': 'buyer'},
        ]
