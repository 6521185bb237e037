# tabsettle/settlement.py
"""
Settle a group tab with as few point-to-point payments as the greedy
largest-debtor/largest-creditor matching gives.

Amounts are integers in minor currency units (cents). Greedy matching is an
approximation: finding the true minimum number of transfers is a much harder
combinatorial problem, but in the common case (one or two people fronting the
bill) greedy already produces the minimum.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from tabsettle.exceptions import ArithmeticInvariantError, InvalidInputError

logger = logging.getLogger(__name__)

ParticipantId = Union[str, int]


@dataclass(frozen=True)
class Participant:
    id: ParticipantId
    paid: int  # total disbursed
    owed: int  # fair share

    @property
    def balance(self) -> int:
        # positive is owed money, negative owes money
        return self.paid - self.owed


@dataclass(frozen=True)
class Transfer:
    from_id: ParticipantId  # debtor
    to_id: ParticipantId  # creditor
    amount: int

    def as_dict(self):
        return {"from": self.from_id, "to": self.to_id, "amount": self.amount}


@dataclass(frozen=True)
class SettlementPlan:
    transfers: Tuple[Transfer, ...]
    # Rounding residue left unsettled. Positive: creditors are short this much.
    # Negative: debtors still hold this much after every creditor is paid.
    unsettled_remainder: int = 0

    def as_dict(self):
        return {
            "transfers": [t.as_dict() for t in self.transfers],
            "unsettled_remainder": self.unsettled_remainder,
        }


def is_minor_units(value) -> bool:
    # bool is an int subclass but never a valid amount
    return isinstance(value, int) and not isinstance(value, bool)


def _validate(participants: List[Participant]) -> None:
    if not participants:
        raise InvalidInputError("at least one participant required")

    seen = set()
    id_type = None
    for p in participants:
        if isinstance(p.id, bool) or not isinstance(p.id, (str, int)):
            raise InvalidInputError(f"participant id must be a string or an integer, got {p.id!r}")
        if id_type is None:
            id_type = type(p.id)
        elif type(p.id) is not id_type:
            raise InvalidInputError("participant ids must all be of the same type")
        if p.id in seen:
            raise InvalidInputError(f"duplicate participant id {p.id!r}")
        seen.add(p.id)

        for field in ("paid", "owed"):
            value = getattr(p, field)
            if not is_minor_units(value):
                raise InvalidInputError(
                    f"{field} for {p.id!r} must be an integer amount in minor units, got {value!r}"
                )
            if value < 0:
                raise InvalidInputError(f"{field} for {p.id!r} must not be negative")


def compute_settlement(participants: Iterable[Participant]) -> SettlementPlan:
    """Compute the transfers that bring every participant's balance to zero.

    Raises InvalidInputError for a broken input contract and
    ArithmeticInvariantError when balances sum to more than
    ``len(participants) - 1`` minor units away from zero. A lone participant
    therefore gets an empty plan only when their balance is zero; any other
    balance raises instead of returning no transfers. Inputs are never
    modified.
    """
    participants = list(participants)
    _validate(participants)

    # 1. Check the balances actually net out
    total = sum(p.balance for p in participants)
    tolerance = len(participants) - 1
    if abs(total) > tolerance:
        raise ArithmeticInvariantError(
            f"balances sum to {total}, outside the rounding tolerance of {tolerance}"
        )

    # 2. Separate Debtors and Creditors
    debtors = []
    creditors = []

    for p in participants:
        if p.balance < 0:
            debtors.append([p.id, p.balance])
        elif p.balance > 0:
            creditors.append([p.id, p.balance])

    # most negative / most positive first, ties by id
    debtors.sort(key=lambda x: (x[1], x[0]))
    creditors.sort(key=lambda x: (-x[1], x[0]))

    # 3. Match them up
    transfers = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(-debtor[1], creditor[1])
        if amount > 0:
            transfers.append(Transfer(from_id=debtor[0], to_id=creditor[0], amount=amount))

        debtor[1] += amount
        creditor[1] -= amount

        if debtor[1] == 0:
            i += 1
        if creditor[1] == 0:
            j += 1

    if total:
        logger.warning("Leaving %d minor unit(s) unsettled across %d participants", total, len(participants))
    logger.debug("Settled %d participants with %d transfers", len(participants), len(transfers))

    return SettlementPlan(transfers=tuple(transfers), unsettled_remainder=total)


def settle(participants: Iterable[Participant]) -> List[Transfer]:
    """Like compute_settlement, but only the transfer list."""
    return list(compute_settlement(participants).transfers)
