import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from apps.core.exceptions import LedgerWriteOutsideTransaction
from apps.ledger.models import PointsLedgerEntry, SourceType
from apps.ledger.services import LedgerService
from apps.ledger.unit_of_work import UnitOfWork


@pytest.mark.django_db
class TestLedger:
    def test_balance_is_sum_of_entries(self, agency):
        with UnitOfWork() as uow:
            LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 1, 500)
            LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 2, 250)
            LedgerService.debit(uow, agency.pk, SourceType.ORDER, 1, 300)
            LedgerService.adjust(uow, agency.pk, -50, "Correção")

        assert LedgerService.get_balance(agency.pk) == 400
        assert agency.balance == 400

    def test_empty_ledger_balance_is_zero(self, agency):
        assert LedgerService.get_balance(agency.pk) == 0
        summary = LedgerService.get_summary(agency.pk)
        assert summary['current_points'] == 0
        assert summary['last_updated_at'] is None

    def test_debit_stores_negative_points(self, agency):
        with UnitOfWork() as uow:
            entry = LedgerService.debit(uow, agency.pk, SourceType.ORDER, 10, 120)

        assert entry.points == -120

    def test_debit_rejects_zero_points(self, agency):
        with UnitOfWork() as uow:
            with pytest.raises(ValueError):
                LedgerService.debit(uow, agency.pk, SourceType.ORDER, 10, 0)

        assert not PointsLedgerEntry.objects.filter(agency=agency).exists()

    def test_credit_requires_positive_integer(self, agency):
        with UnitOfWork() as uow:
            with pytest.raises(ValueError):
                LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 1, 0)
            with pytest.raises(ValueError):
                LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 1, 10.5)
            with pytest.raises(ValueError):
                LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 1, True)

    def test_adjustment_requires_description(self, agency):
        with UnitOfWork() as uow:
            with pytest.raises(ValueError):
                LedgerService.adjust(uow, agency.pk, 10, "")

    def test_write_outside_unit_of_work_is_refused(self, agency):
        uow = UnitOfWork()

        with pytest.raises(LedgerWriteOutsideTransaction):
            LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 1, 100)

        assert PointsLedgerEntry.objects.count() == 0

    def test_failure_rolls_back_all_writes(self, agency):
        with pytest.raises(RuntimeError):
            with UnitOfWork() as uow:
                LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 1, 100)
                raise RuntimeError("boom")

        assert LedgerService.get_balance(agency.pk) == 0

    def test_entries_are_immutable(self, agency, credit_points):
        entry = credit_points(agency, 100)

        entry.points = 1000
        with pytest.raises(ValidationError):
            entry.save()
        with pytest.raises(ValidationError):
            entry.delete()

        assert LedgerService.get_balance(agency.pk) == 100

    def test_import_item_credited_once(self, agency):
        with UnitOfWork() as uow:
            LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 42, 100)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                with UnitOfWork() as uow:
                    LedgerService.credit(uow, agency.pk, SourceType.IMPORT, 42, 100)

        assert LedgerService.get_balance(agency.pk) == 100

    def test_adjustments_have_no_unique_source(self, agency):
        with UnitOfWork() as uow:
            LedgerService.adjust(uow, agency.pk, 10, "Bônus")
            LedgerService.adjust(uow, agency.pk, 10, "Bônus")

        assert LedgerService.get_balance(agency.pk) == 20

    def test_entries_for_newest_first(self, agency, credit_points):
        first = credit_points(agency, 100)
        second = credit_points(agency, 200)

        entries = list(LedgerService.entries_for(agency.pk))
        assert [e.pk for e in entries] == [second.pk, first.pk]
