from tabsettle.exceptions import ArithmeticInvariantError, InvalidInputError, SettlementError
from tabsettle.settlement import Participant, SettlementPlan, Transfer, compute_settlement, settle

__all__ = [
    "ArithmeticInvariantError",
    "InvalidInputError",
    "Participant",
    "SettlementError",
    "SettlementPlan",
    "Transfer",
    "compute_settlement",
    "settle",
]
