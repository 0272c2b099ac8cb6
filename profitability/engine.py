import logging
from typing import Optional

from profitability.calculators import CommissionCalculator, CostAggregator
from profitability.interface import CalculationResult, ProductBase, SalesChannel
from profitability.registry import ChannelMetadataRegistry
from profitability.validator import ChannelValidator

logger = logging.getLogger(__name__)

# Faixas de margem (%) para o status textual
EXCELLENT_MARGIN = 30.0
GOOD_MARGIN = 15.0


def profitability_status(margin_percent: float) -> str:
    """Status textual da lucratividade a partir da margem"""
    if margin_percent >= EXCELLENT_MARGIN:
        return "Excelente"
    if margin_percent >= GOOD_MARGIN:
        return "Boa"
    if margin_percent >= 0:
        return "Baixa"
    return "Prejuízo"


class ProfitabilityEngine:
    """
    Engine de lucratividade por canal.

    Orquestra validação -> comissão -> demais custos em um único resultado.
    Função pura: sem I/O, sem estado mutável compartilhado, segura para ser
    chamada a cada alteração de input.
    """

    TARGET_PRICE_MAX_ITERATIONS = 100
    TARGET_PRICE_CEILING = 1_000_000.0

    def __init__(
        self,
        registry: ChannelMetadataRegistry,
        validator: Optional[ChannelValidator] = None,
        commission_calculator: Optional[CommissionCalculator] = None,
        cost_aggregator: Optional[CostAggregator] = None,
        target_price_max_iterations: Optional[int] = None,
    ):
        self.registry = registry
        self.validator = validator or ChannelValidator(registry)
        self.commission_calculator = commission_calculator or CommissionCalculator()
        self.cost_aggregator = cost_aggregator or CostAggregator()
        self.target_price_max_iterations = (
            self.TARGET_PRICE_MAX_ITERATIONS if target_price_max_iterations is None else target_price_max_iterations
        )

    def evaluate(self, channel: SalesChannel, product_base: ProductBase) -> CalculationResult:
        """
        Calcula a lucratividade de um canal.

        Args:
            channel: Canal com preço e parâmetros de custo
            product_base: Custo do item e % de imposto do produto

        Returns:
            CalculationResult válido e completo, ou inválido, zerado e com erros
        """
        validation = self.validator.validate(channel, product_base.cost_item, product_base.tax_percent)
        if not validation.is_valid:
            logger.debug(f"[{channel.type.value}] Canal inválido: {validation.errors}")
            return CalculationResult.invalid(channel.type, validation.errors)

        data = channel.data

        # Receitas
        gross_revenue = data.price
        rebate_income = data.rebate_value or 0.0
        net_revenue = gross_revenue + rebate_income

        # Custos
        rules = self.commission_calculator.rules_from(data)
        commission_cost = self.commission_calculator.commission(gross_revenue, rules)
        costs = self.cost_aggregator.aggregate(
            gross_revenue,
            data,
            product_base.cost_item,
            product_base.tax_percent,
            commission_cost=commission_cost,
        )

        # Totais e indicadores
        total_costs = costs.total_costs
        gross_profit = gross_revenue - total_costs
        net_profit = net_revenue - total_costs
        margin_percent = (net_profit / gross_revenue * 100) if gross_revenue > 0 else 0.0
        roi_percent = (net_profit / total_costs * 100) if total_costs > 0 else 0.0

        return CalculationResult(
            channel_type=channel.type,
            gross_revenue=gross_revenue,
            net_revenue=net_revenue,
            rebate_income=rebate_income,
            costs=costs,
            gross_profit=gross_profit,
            net_profit=net_profit,
            margin_percent=margin_percent,
            roi_percent=roi_percent,
            is_profit=net_profit > 0,
            is_valid=True,
            errors=[],
        )

    def _margin_at(self, channel: SalesChannel, product_base: ProductBase, price: float) -> Optional[float]:
        data = channel.data.model_copy(update={"price": price})
        result = self.evaluate(channel.model_copy(update={"data": data}), product_base)
        return result.margin_percent if result.is_valid else None

    def target_price(
        self,
        channel: SalesChannel,
        product_base: ProductBase,
        target_margin_percent: float,
    ) -> Optional[float]:
        """
        Menor preço (em centavos) que atinge a margem alvo no canal.

        Busca por bisseção entre o custo do item e um teto; a margem cresce com o
        preço enquanto os custos percentuais somam menos de 100%.

        Args:
            channel: Canal (o preço atual é ignorado)
            product_base: Dados do produto
            target_margin_percent: Margem desejada em %

        Returns:
            Preço arredondado para cima em centavos, ou None se a margem for
            inatingível ou o canal for inválido por outro motivo que não o preço
        """
        low = max(product_base.cost_item, 0.01)
        high = low

        margin = self._margin_at(channel, product_base, high)
        if margin is None:
            return None
        if margin >= target_margin_percent:
            return round(high, 2)

        # Expande o teto até atingir a margem
        while margin < target_margin_percent:
            high *= 2
            if high > self.TARGET_PRICE_CEILING:
                logger.debug(
                    f"[{channel.type.value}] Margem alvo {target_margin_percent:.2f}% inatingível"
                )
                return None
            margin = self._margin_at(channel, product_base, high)
            if margin is None:
                return None

        for _ in range(self.target_price_max_iterations):
            if high - low < 0.005:
                break
            middle = (low + high) / 2
            margin = self._margin_at(channel, product_base, middle)
            if margin is not None and margin >= target_margin_percent:
                high = middle
            else:
                low = middle

        # Arredonda para cima em centavos para não ficar abaixo da margem
        price = round(high, 2)
        if price < high:
            price = round(price + 0.01, 2)
        return price
