"""Domain layer for billtrack application.

Services are imported lazily: the database layer imports
``billtrack.domain.entities`` and the services import the database layer.
"""

_SERVICES = {
    "UserService": "billtrack.domain.user",
    "PartnerService": "billtrack.domain.partner",
    "CategoryService": "billtrack.domain.category",
    "InvoiceService": "billtrack.domain.invoice",
    "InvoiceFilterService": "billtrack.domain.filters",
    "DashboardService": "billtrack.domain.dashboard",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
