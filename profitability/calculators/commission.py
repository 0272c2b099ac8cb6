from typing import Optional

from profitability.interface import CommissionRules, CommissionRulesError, CostData


class CommissionCalculator:
    """
    Calculadora de comissão do canal.

    Suporta:
    - Percentual simples sobre o preço
    - Comissão por faixa (um % até o valor limite, outro % acima dele)
    - Limites mínimo e máximo em R$
    """

    @staticmethod
    def rules_from(cost_data: CostData) -> CommissionRules:
        """Extrai as regras de comissão dos dados de custo do canal"""
        return CommissionRules(
            percent=cost_data.commission_percent or 0.0,
            up_to_value=cost_data.commission_up_to_value,
            above_value=cost_data.commission_above_value,
            min_value=cost_data.commission_min_value,
            max_value=cost_data.commission_max_value,
        )

    @staticmethod
    def _bound(value: Optional[float]) -> Optional[float]:
        # Limite zerado (campo em branco no formulário) significa "sem limite"
        if value is None or value <= 0:
            return None
        return value

    def check_rules(self, rules: CommissionRules) -> None:
        """
        Raises:
            CommissionRulesError: Se o mínimo for maior que o máximo
        """
        min_value = self._bound(rules.min_value)
        max_value = self._bound(rules.max_value)
        if min_value is not None and max_value is not None and min_value > max_value:
            raise CommissionRulesError(
                f"Comissão mínima (R$ {min_value:.2f}) maior que a máxima (R$ {max_value:.2f})"
            )

    def commission(self, price: float, rules: CommissionRules) -> float:
        """
        Calcula a comissão em R$ para um preço.

        Args:
            price: Preço de venda (não é validado aqui)
            rules: Regras de comissão do canal

        Returns:
            Comissão já limitada por mínimo e máximo
        """
        self.check_rules(rules)

        if rules.is_tiered:
            if price <= rules.up_to_value:
                commission = price * rules.percent / 100
            else:
                commission = (
                    rules.up_to_value * rules.percent / 100
                    + (price - rules.up_to_value) * rules.above_value / 100
                )
        else:
            commission = price * rules.percent / 100

        min_value = self._bound(rules.min_value)
        if min_value is not None:
            commission = max(commission, min_value)

        max_value = self._bound(rules.max_value)
        if max_value is not None:
            commission = min(commission, max_value)

        return commission
