# tabsettle/ledger.py
"""
Turn raw expense records and an attendee roster into Participant records.

These helpers sit on the caller's side of the settlement engine: they decide
who paid what and how the event total is shared out, including where the
minor units left over from integer division go.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from tabsettle.exceptions import InvalidInputError
from tabsettle.settlement import Participant, is_minor_units


class Expense:
    def __init__(self, payer, amount, title=None):
        if not is_minor_units(amount):
            raise InvalidInputError(f"expense amount must be an integer in minor units, got {amount!r}")
        if amount < 0:
            raise InvalidInputError("expense amount must not be negative")
        self.payer = payer
        self.amount = amount
        self.title = title

    def __repr__(self):
        return f"Expense(payer={self.payer!r}, amount={self.amount!r}, title={self.title!r})"


def _check_roster(roster: Sequence) -> None:
    if not roster:
        raise InvalidInputError("at least one participant required")
    if len(set(roster)) != len(roster):
        raise InvalidInputError("roster contains duplicate participant ids")


def total_expenses(expenses: Iterable[Expense]) -> int:
    return sum(e.amount for e in expenses)


def paid_totals(expenses: Iterable[Expense], roster: Sequence) -> Dict[object, int]:
    """Sum what each roster member paid. Members who paid nothing get 0."""
    _check_roster(roster)
    paid = {member: 0 for member in roster}
    for expense in expenses:
        if expense.payer not in paid:
            raise InvalidInputError(f"expense payer {expense.payer!r} is not on the roster")
        paid[expense.payer] += expense.amount
    return paid


def equal_shares(total: int, roster: Sequence) -> Dict[object, int]:
    """Split ``total`` evenly; the first ``total % n`` members absorb one extra unit.

    >>> equal_shares(100, ["A", "B", "C"])
    {'A': 34, 'B': 33, 'C': 33}
    """
    _check_roster(roster)
    if not is_minor_units(total) or total < 0:
        raise InvalidInputError(f"total must be a non-negative integer, got {total!r}")

    share, rem = divmod(total, len(roster))
    return {member: share + (1 if i < rem else 0) for i, member in enumerate(roster)}


def weighted_shares(total: int, weights: Mapping[object, int]) -> Dict[object, int]:
    """Split ``total`` proportionally to integer weights.

    Uses largest-remainder apportionment so the shares always add up to
    ``total`` exactly. Leftover units go to the largest fractional parts,
    ties broken by the order of ``weights``.
    """
    if not weights:
        raise InvalidInputError("at least one participant required")
    if not is_minor_units(total) or total < 0:
        raise InvalidInputError(f"total must be a non-negative integer, got {total!r}")
    for member, weight in weights.items():
        if not is_minor_units(weight) or weight < 0:
            raise InvalidInputError(f"weight for {member!r} must be a non-negative integer")

    weight_sum = sum(weights.values())
    if weight_sum == 0:
        raise InvalidInputError("at least one weight must be positive")

    shares = {}
    remainders = []
    for position, (member, weight) in enumerate(weights.items()):
        share, rem = divmod(total * weight, weight_sum)
        shares[member] = share
        remainders.append((-rem, position, member))

    leftover = total - sum(shares.values())
    for _, _, member in sorted(remainders)[:leftover]:
        shares[member] += 1
    return shares


def build_participants(
    expenses: Iterable[Expense],
    roster: Sequence,
    shares: Optional[Mapping[object, int]] = None,
) -> List[Participant]:
    """Aggregate expenses into one Participant per roster member, in roster order.

    ``shares`` maps each member to what they owe; when omitted the event total
    is split with equal_shares.
    """
    expenses = list(expenses)
    paid = paid_totals(expenses, roster)

    if shares is None:
        shares = equal_shares(total_expenses(expenses), roster)
    elif set(shares) != set(roster):
        raise InvalidInputError("shares must name exactly the roster members")

    return [Participant(id=member, paid=paid[member], owed=shares[member]) for member in roster]
