import math
from typing import List, Optional

from profitability.interface import SalesChannel, ValidationResult
from profitability.registry import FIELD_LABELS, ChannelMetadataRegistry


class ChannelValidator:
    """
    Validação das regras de negócio de um canal antes do cálculo.

    Todas as regras são avaliadas (sem interromper no primeiro erro) para que o
    usuário veja todos os problemas de uma vez. Erros são devolvidos como dados,
    nunca levantados.
    """

    MAX_COMMISSION_PERCENT = 50.0
    MAX_FIXED_COST_PERCENT = 20.0
    MAX_MARKETING_COST_PERCENT = 30.0

    def __init__(
        self,
        registry: ChannelMetadataRegistry,
        max_commission_percent: Optional[float] = None,
        max_fixed_cost_percent: Optional[float] = None,
        max_marketing_cost_percent: Optional[float] = None,
    ):
        self.registry = registry
        self.max_commission_percent = (
            self.MAX_COMMISSION_PERCENT if max_commission_percent is None else max_commission_percent
        )
        self.max_fixed_cost_percent = (
            self.MAX_FIXED_COST_PERCENT if max_fixed_cost_percent is None else max_fixed_cost_percent
        )
        self.max_marketing_cost_percent = (
            self.MAX_MARKETING_COST_PERCENT if max_marketing_cost_percent is None else max_marketing_cost_percent
        )

    @classmethod
    def from_settings(cls, registry: ChannelMetadataRegistry, settings) -> "ChannelValidator":
        return cls(
            registry,
            max_commission_percent=settings.max_commission_percent,
            max_fixed_cost_percent=settings.max_fixed_cost_percent,
            max_marketing_cost_percent=settings.max_marketing_cost_percent,
        )

    def validate(self, channel: SalesChannel, product_cost: float, tax_percent: float) -> ValidationResult:
        """
        Valida preço, dados do produto, faixas de custos e campos obrigatórios do canal.

        Args:
            channel: Canal com os dados de custo
            product_cost: Custo do item
            tax_percent: % de imposto

        Returns:
            ValidationResult com todos os erros encontrados
        """
        data = channel.data
        errors: List[str] = []

        # Validações básicas
        if not data.price > 0:
            errors.append("Preço deve ser maior que zero")

        if not product_cost > 0:
            errors.append("Custo do produto deve ser maior que zero")

        if not 0 <= tax_percent <= 100:
            errors.append("Taxa de imposto deve estar entre 0% e 100%")

        # Comissão
        if data.commission_percent is not None and not 0 <= data.commission_percent <= self.max_commission_percent:
            errors.append(f"Comissão deve estar entre 0% e {self.max_commission_percent:g}%")

        if (
            data.commission_min_value is not None
            and data.commission_max_value is not None
            and data.commission_min_value > 0
            and data.commission_max_value > 0
            and data.commission_min_value > data.commission_max_value
        ):
            errors.append("Comissão mínima não pode ser maior que a comissão máxima")

        # Custos
        if not data.packaging_cost_value >= 0:
            errors.append("Custo de embalagem não pode ser negativo")

        if not 0 <= data.fixed_cost_percent <= self.max_fixed_cost_percent:
            errors.append(f"Custo fixo deve estar entre 0% e {self.max_fixed_cost_percent:g}%")

        if not 0 <= data.marketing_cost_percent <= self.max_marketing_cost_percent:
            errors.append(f"Custo de marketing deve estar entre 0% e {self.max_marketing_cost_percent:g}%")

        if data.financial_cost_percent is not None and not 0 <= data.financial_cost_percent <= 100:
            errors.append("Custo financeiro deve estar entre 0% e 100%")

        for field, label in (
            ("shipping_cost_value", "Custo de frete"),
            ("prep_center_cost_value", "Custo de prep center"),
            ("rebate_value", "Rebate"),
        ):
            value = getattr(data, field)
            if value is not None and not value >= 0:
                errors.append(f"{label} não pode ser negativo")

        # Valores não finitos nunca chegam ao cálculo
        for field, label in FIELD_LABELS.items():
            value = getattr(data, field)
            if value is not None and not math.isfinite(value):
                errors.append(f"Valor inválido: {label}")
        for value, label in ((product_cost, "Custo do produto"), (tax_percent, "Taxa de imposto")):
            if not math.isfinite(value):
                errors.append(f"Valor inválido: {label}")

        # Campos obrigatórios do canal
        metadata = self.registry.get(channel.type)
        for field in metadata.required_fields:
            if not getattr(data, field, None):
                errors.append(f"Campo obrigatório não informado: {self.registry.field_label(field)}")

        return ValidationResult(is_valid=not errors, errors=errors)
