from django.db import DEFAULT_DB_ALIAS, transaction

from apps.core.exceptions import LedgerWriteOutsideTransaction


class UnitOfWork:
    """
    Explicit transaction boundary shared by every ledger write and by the
    reads that justify it.

        with UnitOfWork() as uow:
            agency = uow.lock_agency(agency_id)
            ...
            LedgerService.debit(uow, agency.pk, SourceType.ORDER, order.pk, total)

    Any exception inside the block rolls back all writes made in it.
    """

    def __init__(self, using=None):
        self.using = using or DEFAULT_DB_ALIAS
        self._atomic = None

    def __enter__(self):
        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        atomic, self._atomic = self._atomic, None
        return atomic.__exit__(exc_type, exc_value, traceback)

    @property
    def is_active(self):
        return self._atomic is not None and transaction.get_connection(self.using).in_atomic_block

    def ensure_active(self):
        if not self.is_active:
            raise LedgerWriteOutsideTransaction()

    def lock_agency(self, agency_id):
        """Row lock on the agency; serializes balance check + debit per agency."""
        from apps.agencies.models import Agency
        self.ensure_active()
        return Agency.objects.using(self.using).select_for_update().get(pk=agency_id)

    def on_commit(self, func):
        transaction.on_commit(func, using=self.using)
