"""Domain layer for switchbooks application."""

# Services are imported lazily: database.base imports domain.entities, and
# every service imports database.base.
_SERVICES = {
    "AutomationService": "switchbooks.domain.automation",
    "ChartOfAccountsService": "switchbooks.domain.chart",
    "ManualJournalService": "switchbooks.domain.manual_journal",
    "PayeeService": "switchbooks.domain.payee",
    "PendingTransactionService": "switchbooks.domain.pending",
    "ReportService": "switchbooks.domain.report",
    "SourceAccountService": "switchbooks.domain.source_account",
    "TransactionService": "switchbooks.domain.transaction",
}

__all__ = sorted(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
