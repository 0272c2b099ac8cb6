from profitability.interface import CostBreakdown, CostData


class CostAggregator:
    """
    Compõe os demais custos do canal a partir de percentuais e valores fixos.

    Todos os custos percentuais incidem sobre a receita bruta (preço de lista),
    nunca sobre a receita líquida.
    """

    @staticmethod
    def percentage_cost(base_value: float, percentage: float) -> float:
        return base_value * percentage / 100

    def aggregate(
        self,
        gross_revenue: float,
        cost_data: CostData,
        product_cost: float,
        tax_percent: float,
        commission_cost: float = 0.0,
    ) -> CostBreakdown:
        """
        Monta o breakdown de custos do canal.

        Args:
            gross_revenue: Receita bruta (preço de venda)
            cost_data: Parâmetros de custo do canal
            product_cost: Custo do item
            tax_percent: % de imposto sobre o custo do item
            commission_cost: Comissão já calculada pela CommissionCalculator

        Returns:
            CostBreakdown com os 9 componentes e o total
        """
        breakdown = CostBreakdown(
            product_cost=product_cost,
            tax_cost=self.percentage_cost(product_cost, tax_percent),
            commission_cost=commission_cost,
            packaging_cost=cost_data.packaging_cost_value,
            fixed_cost=self.percentage_cost(gross_revenue, cost_data.fixed_cost_percent),
            marketing_cost=self.percentage_cost(gross_revenue, cost_data.marketing_cost_percent),
            financial_cost=self.percentage_cost(gross_revenue, cost_data.financial_cost_percent or 0.0),
            shipping_cost=cost_data.shipping_cost_value or 0.0,
            prep_center_cost=cost_data.prep_center_cost_value or 0.0,
        )
        breakdown.total_costs = sum(breakdown.components().values())
        return breakdown
