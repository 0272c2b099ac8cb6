import pytest

from profitability import (
    ChannelMetadataRegistry,
    ChannelType,
    CostData,
    MultiChannelAggregator,
    ProductBase,
    ProfitabilityEngine,
    SalesChannel,
)


@pytest.fixture
def registry() -> ChannelMetadataRegistry:
    return ChannelMetadataRegistry.default()


@pytest.fixture
def engine(registry) -> ProfitabilityEngine:
    return ProfitabilityEngine(registry)


@pytest.fixture
def aggregator(engine) -> MultiChannelAggregator:
    return MultiChannelAggregator(engine)


@pytest.fixture
def product() -> ProductBase:
    return ProductBase(cost_item=80.0, tax_percent=10.0)


@pytest.fixture
def fba_channel() -> SalesChannel:
    """Canal Amazon FBA com todos os custos preenchidos"""
    return SalesChannel(
        type=ChannelType.AMAZON_FBA,
        is_active=True,
        data=CostData(
            price=200.0,
            commission_percent=15.0,
            packaging_cost_value=3.0,
            fixed_cost_percent=5.0,
            marketing_cost_percent=10.0,
            financial_cost_percent=2.0,
            shipping_cost_value=20.0,
            prep_center_cost_value=5.0,
            product_codes={"asin": "B0TEST1234", "fnsku": "X00TEST"},
        ),
    )
