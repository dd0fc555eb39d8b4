"""ledgerbook: double-entry bookkeeping with a chart of accounts, a journal
and financial reports, driven from the ``ledgerbook`` command line tool.
"""


def __getattr__(name):
    # The CLI pulls in the whole domain layer; load it on first use.
    if name == "main":
        from ledgerbook.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
