import copy
from typing import Dict, NamedTuple

from conference_portal.core.errors import InvalidSelection


class Fee(NamedTuple):
    currency: str
    amount: int


FEES: Dict[str, Dict[str, Dict]] = {
    "Research Scholars": {
        "INDIA": {"currency": "INR", "amount": 1500},
        "ASIA": {"currency": "USD", "amount": 100},
        "OTHER": {"currency": "USD", "amount": 125},
    },
    "Academia": {
        "INDIA": {"currency": "INR", "amount": 2000},
        "ASIA": {"currency": "USD", "amount": 150},
        "OTHER": {"currency": "USD", "amount": 175},
    },
    "Industry Professionals": {
        "INDIA": {"currency": "INR", "amount": 2500},
        "ASIA": {"currency": "USD", "amount": 200},
        "OTHER": {"currency": "USD", "amount": 225},
    },
    "Listeners / Accompanying": {
        "INDIA": {"currency": "INR", "amount": 500},
        "ASIA": {"currency": "USD", "amount": 30},
        "OTHER": {"currency": "USD", "amount": 40},
    },
}


def fee_table() -> Dict[str, Dict[str, Dict]]:
    """Copy of the fee table, safe to hand out to callers"""
    return copy.deepcopy(FEES)


def lookup_fee(category: str, region: str) -> Fee:
    entry = FEES.get(category, {}).get(region)
    if entry is None:
        raise InvalidSelection()
    return Fee(entry["currency"], entry["amount"])
