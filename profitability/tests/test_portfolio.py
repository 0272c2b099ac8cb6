import pytest

from profitability import ChannelConfigError, ChannelType, CostData, ProductBase, SalesChannel


@pytest.fixture
def base() -> ProductBase:
    return ProductBase(cost_item=80.0, tax_percent=0.0)


def _valid_channel() -> SalesChannel:
    # Receita 100, custo 80: margem de 20%
    return SalesChannel(type=ChannelType.MARKETPLACE_OTHER, is_active=True, data=CostData(price=100.0))


def _invalid_channel() -> SalesChannel:
    return SalesChannel(type=ChannelType.SHOPEE, is_active=True, data=CostData(price=0.0, commission_percent=14.0))


def test_evaluate_all_only_active_channels(aggregator, base):
    """Testa se canais inativos ficam fora do resultado"""
    inactive = SalesChannel(type=ChannelType.SITE_PROPRIO, is_active=False, data=CostData(price=100.0))

    results = aggregator.evaluate_all([_valid_channel(), inactive], base)

    assert list(results) == [ChannelType.MARKETPLACE_OTHER]


def test_invalid_channel_excluded_from_average(aggregator, base):
    """Testa se canal inválido não entra na margem média (nem como zero)"""
    summary = aggregator.evaluate_portfolio([_valid_channel(), _invalid_channel()], base)

    assert summary.average_margin == pytest.approx(20.0)
    assert summary.valid_channels == 1
    assert summary.total_revenue == pytest.approx(100.0)
    assert summary.total_profit == pytest.approx(20.0)
    assert summary.best_channel == ChannelType.MARKETPLACE_OTHER
    assert summary.results[ChannelType.SHOPEE].is_valid is False


def test_totals_include_rebate(aggregator, base):
    """Testa se a receita total soma as receitas líquidas"""
    site = SalesChannel(type=ChannelType.SITE_PROPRIO, is_active=True, data=CostData(
        price=200.0, financial_cost_percent=5.0, rebate_value=10.0,
    ))

    summary = aggregator.evaluate_portfolio([_valid_channel(), site], base)

    # Site: receita 210, custos 80 + 10 de financeiro
    assert summary.total_revenue == pytest.approx(310.0)
    assert summary.total_profit == pytest.approx(20.0 + 120.0)
    assert summary.average_margin == pytest.approx((20.0 + 60.0) / 2)
    assert summary.best_channel == ChannelType.SITE_PROPRIO


def test_empty_portfolio(aggregator, base):
    """Testa produto sem canais ativos"""
    summary = aggregator.evaluate_portfolio([], base)

    assert summary.results == {}
    assert summary.average_margin == 0.0
    assert summary.best_channel is None


def test_order_does_not_change_results(aggregator, base):
    """Testa se a ordem dos canais não altera o resultado"""
    forward = aggregator.evaluate_portfolio([_valid_channel(), _invalid_channel()], base)
    backward = aggregator.evaluate_portfolio([_invalid_channel(), _valid_channel()], base)

    assert forward.results == backward.results
    assert forward.average_margin == backward.average_margin
    assert forward.total_profit == backward.total_profit


def test_duplicate_channel_type_raises(aggregator, base):
    """Testa se o mesmo canal duas vezes é erro de configuração"""
    with pytest.raises(ChannelConfigError):
        aggregator.evaluate_all([_valid_channel(), _valid_channel()], base)
