from .commission import CommissionCalculator
from .costs import CostAggregator

__all__ = [
    "CommissionCalculator",
    "CostAggregator",
]
