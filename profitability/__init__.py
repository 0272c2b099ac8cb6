from .interface import (
    CalculationResult,
    ChannelCategory,
    ChannelConfigError,
    ChannelMetadata,
    ChannelType,
    CommissionRules,
    CommissionRulesError,
    CostBreakdown,
    CostData,
    PortfolioSummary,
    ProductBase,
    SalesChannel,
    UnknownChannelError,
    ValidationResult,
)
from .registry import ChannelMetadataRegistry
from .calculators import CommissionCalculator, CostAggregator
from .validator import ChannelValidator
from .engine import ProfitabilityEngine, profitability_status
from .portfolio import MultiChannelAggregator

__all__ = [
    "CalculationResult",
    "ChannelCategory",
    "ChannelConfigError",
    "ChannelMetadata",
    "ChannelType",
    "CommissionRules",
    "CommissionRulesError",
    "CostBreakdown",
    "CostData",
    "PortfolioSummary",
    "ProductBase",
    "SalesChannel",
    "UnknownChannelError",
    "ValidationResult",
    "ChannelMetadataRegistry",
    "CommissionCalculator",
    "CostAggregator",
    "ChannelValidator",
    "ProfitabilityEngine",
    "profitability_status",
    "MultiChannelAggregator",
]
