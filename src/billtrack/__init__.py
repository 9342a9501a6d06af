"""Invoice tracking for small businesses."""

__version__ = "0.1.0"


def __getattr__(name):
    # Resolve the CLI entry point lazily, the CLI imports every layer
    if name == "main":
        from billtrack.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
