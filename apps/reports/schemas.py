"""
Typed shapes of the JSON columns on ShiftReport, plus tri-state updates

orders_in_progress  [{"account": str, "deadline": str, "handlerPhone": str}]
accounts_created    [{"email": str, "type": "seller" | "buyer"}]

Parsing is lenient: legacy rows may hold anything, so a value that is not a
list (or not valid JSON) reads as an empty list and entries that are not
objects are dropped. Nothing here raises on bad stored data.

Updates to these columns are tri-state:

    UNCHANGED       leave the stored value alone (field omitted)
    CLEAR           store NULL (field sent as null)
    Set(items)      replace the list; Set(()) behaves like CLEAR
"""
import enum
import json
from dataclasses import dataclass


@dataclass(frozen=True)
class OrderInProgress:
    account: str
    deadline: str = ''
    handler_phone: str = ''

    @classmethod
    def from_json(cls, data):
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            return None
        return cls(
            account=str(data.get('account') or '').strip(),
            deadline=str(data.get('deadline') or '').strip(),
            handler_phone=str(data.get('handlerPhone') or data.get('handler_phone') or '').strip(),
        )

    def to_json(self):
        return {'account': self.account, 'deadline': self.deadline, 'handlerPhone': self.handler_phone}

    def __str__(self):
        return f"{self.account} ({self.deadline}, {self.handler_phone})"


@dataclass(frozen=True)
class AccountCreated:
    TYPES = ('seller', 'buyer')

    email: str
    type: str = 'seller'

    @classmethod
    def from_json(cls, data):
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            return None
        account_type = str(data.get('type') or 'seller').strip().lower()
        if account_type not in cls.TYPES:
            account_type = 'seller'
        return cls(email=str(data.get('email') or '').strip(), type=account_type)

    def to_json(self):
        return {'email': self.email, 'type': self.type}

    def __str__(self):
        return f"{self.email} ({self.type})"


def _parse_list(value, schema):
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, (list, tuple)):
        return []

    items = []
    for entry in value:
        item = schema.from_json(entry)
        if item is not None:
            items.append(item)
    return items


def parse_orders_in_progress(value):
    """list[OrderInProgress] from a stored or submitted value, [] when malformed."""
    return [item for item in _parse_list(value, OrderInProgress) if item.account]


def parse_accounts_created(value):
    """list[AccountCreated] from a stored or submitted value, [] when malformed."""
    return [item for item in _parse_list(value, AccountCreated) if item.email]


def dump_items(items):
    """JSON column value for a list of schema items; None for an empty list."""
    items = list(items or [])
    if not items:
        return None
    return [item.to_json() for item in items]


# =============================================================================
# Tri-state field updates
# =============================================================================

class FieldAction(enum.Enum):
    UNCHANGED = 'unchanged'
    CLEAR = 'clear'


UNCHANGED = FieldAction.UNCHANGED
CLEAR = FieldAction.CLEAR


@dataclass(frozen=True)
class Set:
    """Replace the stored list with these items"""
    items: tuple = ()


def as_field_update(value, parser):
    """
    Normalise an incoming JSON field value into UNCHANGED / CLEAR / Set

    None means CLEAR, a list means Set(parsed items). FieldAction and Set
    values pass through, with Set items run through the parser.
    """
    if isinstance(value, FieldAction):
        return value
    if isinstance(value, Set):
        return Set(tuple(parser(list(value.items))))
    if value is None:
        return CLEAR
    return Set(tuple(parser(value)))


def apply_field_update(current, update):
    """New column value after applying a tri-state update to `current`."""
    if update is UNCHANGED:
        return current
    if update is CLEAR:
        return None
    return dump_items(update.items)
