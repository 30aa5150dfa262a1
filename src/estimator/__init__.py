"""Contractor cost estimates: sectioned line items, markups and CSV exchange."""

__version__ = "0.1.0"


# Import main lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from estimator.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
