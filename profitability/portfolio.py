import logging
from typing import Dict, Iterable

from profitability.engine import ProfitabilityEngine
from profitability.interface import (
    CalculationResult,
    ChannelConfigError,
    ChannelType,
    PortfolioSummary,
    ProductBase,
    SalesChannel,
)

logger = logging.getLogger(__name__)


class MultiChannelAggregator:
    """
    Consolida a lucratividade dos canais ativos de um produto.

    Cada canal é avaliado de forma independente pelo engine; a ordem de
    avaliação não altera o resultado.
    """

    def __init__(self, engine: ProfitabilityEngine):
        self.engine = engine

    def evaluate_all(
        self,
        channels: Iterable[SalesChannel],
        product_base: ProductBase,
    ) -> Dict[ChannelType, CalculationResult]:
        """
        Calcula o resultado de cada canal ativo.

        Raises:
            ChannelConfigError: Se o mesmo tipo de canal aparecer duas vezes
        """
        results: Dict[ChannelType, CalculationResult] = {}
        for channel in channels:
            if not channel.is_active:
                continue
            if channel.type in results:
                raise ChannelConfigError(f"Canal '{channel.type.value}' duplicado no produto")
            results[channel.type] = self.engine.evaluate(channel, product_base)
        return results

    def summarize(self, results: Dict[ChannelType, CalculationResult]) -> PortfolioSummary:
        """
        Totais do portfólio.

        A margem média considera apenas canais válidos: canais inválidos ficam
        fora da média em vez de entrar com zero.
        """
        valid = [result for result in results.values() if result.is_valid]

        total_revenue = sum(result.net_revenue for result in results.values())
        total_profit = sum(result.net_profit for result in results.values())
        average_margin = sum(result.margin_percent for result in valid) / len(valid) if valid else 0.0
        best = max(valid, key=lambda result: result.net_profit, default=None)

        logger.debug(
            f"Portfólio: {len(results)} canais ativos, {len(valid)} válidos, "
            f"margem média {average_margin:.2f}%"
        )

        return PortfolioSummary(
            results=results,
            total_revenue=total_revenue,
            total_profit=total_profit,
            average_margin=average_margin,
            valid_channels=len(valid),
            best_channel=best.channel_type if best else None,
        )

    def evaluate_portfolio(self, channels: Iterable[SalesChannel], product_base: ProductBase) -> PortfolioSummary:
        """Avalia os canais ativos e devolve o resumo do portfólio"""
        return self.summarize(self.evaluate_all(channels, product_base))
