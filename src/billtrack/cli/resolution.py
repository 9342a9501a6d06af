"""Resolve CLI references (ID or natural key) to entity IDs."""

from billtrack.domain.category import CategoryService
from billtrack.domain.errors import NotFoundError
from billtrack.domain.partner import PartnerService
from billtrack.domain.user import UserService


def _as_id(value: str | int) -> int | None:
    if isinstance(value, int):
        return value
    return int(value) if value.strip().isdigit() else None


def resolve_partner(service: PartnerService, partner: str | int) -> int:
    """Resolve a partner ID, document number or exact name.

    Raises:
        NotFoundError: If nothing matches
    """
    partner_id = _as_id(partner)
    if partner_id is not None and service.get_partner(partner_id) is not None:
        return partner_id

    for candidate in service.list_partners():
        if candidate.document_number == str(partner) or candidate.name == partner:
            return candidate.id

    raise NotFoundError(f"Partner '{partner}' not found")


def resolve_category(service: CategoryService, category: str | int) -> int:
    """Resolve a category ID or name.

    Raises:
        NotFoundError: If nothing matches
    """
    category_id = _as_id(category)
    if category_id is not None and service.get_category(category_id) is not None:
        return category_id

    found = service.get_category_by_name(str(category))
    if found is None:
        raise NotFoundError(f"Category '{category}' not found")
    return found.id


def resolve_user(service: UserService, user: str | int) -> int:
    """Resolve a user ID or username.

    Raises:
        NotFoundError: If nothing matches
    """
    found = service.get_user_by_username(str(user))
    if found is not None:
        return found.id

    user_id = _as_id(user)
    if user_id is not None and service.get_user(user_id) is not None:
        return user_id

    raise NotFoundError(f"User '{user}' not found")
