"""Domain layer for ledgerbook application.

Services are imported lazily: the database layer imports domain.entities,
and eager imports here would pull the services (which import the database
layer) into that import.
"""

_SERVICES = {
    "Ledger": "ledgerbook.domain.ledger",
    "AccountService": "ledgerbook.domain.account",
    "JournalService": "ledgerbook.domain.journal",
    "ReportService": "ledgerbook.domain.reports",
    "DemoDataService": "ledgerbook.domain.demo",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
