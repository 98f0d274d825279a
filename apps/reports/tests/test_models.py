# =============================================================================
# reports/tests/test_models.py - ShiftReport helpers
# =============================================================================

from datetime import date

import pytest

from apps.reports.models import ShiftReport


@pytest.mark.django_db
class TestShiftReportModel:

    def test_reporter_name(self, account, make_report, operator_member):
        report = make_report(account, reported_by=operator_member)
        assert report.reporter_name == 'Otto Operator'

    def test_reporter_deleted(self, account, make_report, operator_member):
        report = make_report(account, reported_by=operator_member)
        operator_member.delete()
        report.refresh_from_db()

        assert report.reported_by is None
        assert report.reporter_name == 'Unknown'

    def test_queryset_windows(self, account, make_report):
        make_report(account, report_date=date(2024, 3, 1))
        make_report(account, report_date=date(2024, 3, 5))

        assert ShiftReport.objects.since(date(2024, 3, 2)).count() == 1
        assert ShiftReport.objects.on(date(2024, 3, 1)).count() == 1
        assert ShiftReport.objects.between(date(2024, 3, 1), date(2024, 3, 5)).count() == 2
