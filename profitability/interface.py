from enum import Enum
from types import MappingProxyType
from typing import List, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from profitability.parsing import parse_value, parse_optional_value


class ChannelConfigError(ValueError):
    """Erro de configuração/programação: nunca causado por input comum do usuário"""


class UnknownChannelError(ChannelConfigError):
    """Tipo de canal inexistente no registry"""


class CommissionRulesError(ChannelConfigError):
    """Regras de comissão malformadas (ex: mínimo maior que máximo)"""


class ChannelType(str, Enum):
    """Conjunto fechado de canais de venda suportados"""
    SITE_PROPRIO = "SITE_PROPRIO"
    AMAZON_FBM = "AMAZON_FBM"
    AMAZON_FBA_ONSITE = "AMAZON_FBA_ONSITE"
    AMAZON_DBA = "AMAZON_DBA"
    AMAZON_FBA = "AMAZON_FBA"
    MERCADO_LIVRE_ME1 = "MERCADO_LIVRE_ME1"
    MERCADO_LIVRE_FLEX = "MERCADO_LIVRE_FLEX"
    MERCADO_LIVRE_ENVIOS = "MERCADO_LIVRE_ENVIOS"
    MERCADO_LIVRE_FULL = "MERCADO_LIVRE_FULL"
    SHOPEE = "SHOPEE"
    MAGALU_FULL = "MAGALU_FULL"
    MAGALU_ENVIOS = "MAGALU_ENVIOS"
    TIKTOKSHOP_NORMAL = "TIKTOKSHOP_NORMAL"
    MARKETPLACE_OTHER = "MARKETPLACE_OTHER"


class ChannelCategory(str, Enum):
    """Agrupamento dos canais para exibição"""
    SITE = "site"
    AMAZON = "amazon"
    MERCADO_LIVRE = "mercadolivre"
    SHOPEE = "shopee"
    MAGALU = "magalu"
    TIKTOK = "tiktok"
    OTHER = "outros"


class ChannelMetadata(BaseModel):
    """Metadados estáticos de um canal (somente leitura)"""
    model_config = ConfigDict(frozen=True)

    display_name: str
    category: ChannelCategory
    description: str = ""
    default_costs: Mapping[str, float] = Field(default_factory=dict, validate_default=True)
    required_fields: Tuple[str, ...] = ()
    product_code_fields: Tuple[str, ...] = ()

    @field_validator("default_costs", mode="after")
    @classmethod
    def freeze_default_costs(cls, v):
        return MappingProxyType(dict(v))

    @field_serializer("default_costs")
    def serialize_default_costs(self, v):
        return dict(v)


class CostData(BaseModel):
    """
    Parâmetros de preço e custo de um canal.

    Campos numéricos aceitam strings no formato brasileiro ("R$ 1.234,56", "12,5%").
    A conversão acontece uma única vez, aqui na fronteira de entrada; campos
    obrigatórios não informados valem 0 e opcionais ficam None.
    """
    price: float = 0.0

    # Comissão: percentual simples ou por faixa, com limites opcionais
    commission_percent: Optional[float] = None
    commission_up_to_value: Optional[float] = None
    commission_above_value: Optional[float] = None  # % aplicado acima de commission_up_to_value
    commission_min_value: Optional[float] = None
    commission_max_value: Optional[float] = None

    packaging_cost_value: float = 0.0
    fixed_cost_percent: float = 0.0
    marketing_cost_percent: float = 0.0
    financial_cost_percent: Optional[float] = None
    shipping_cost_value: Optional[float] = None
    prep_center_cost_value: Optional[float] = None

    # Receita, nunca abatida dos custos
    rebate_value: Optional[float] = None

    product_codes: Dict[str, str] = Field(default_factory=dict)

    @field_validator("price", "packaging_cost_value", "fixed_cost_percent", "marketing_cost_percent", mode="before")
    @classmethod
    def _parse_required_number(cls, value):
        return parse_value(value)

    @field_validator(
        "commission_percent",
        "commission_up_to_value",
        "commission_above_value",
        "commission_min_value",
        "commission_max_value",
        "financial_cost_percent",
        "shipping_cost_value",
        "prep_center_cost_value",
        "rebate_value",
        mode="before",
    )
    @classmethod
    def _parse_optional_number(cls, value):
        return parse_optional_value(value)


class CommissionRules(BaseModel):
    """Regras de comissão extraídas de CostData"""
    percent: float = 0.0
    up_to_value: Optional[float] = None
    above_value: Optional[float] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None

    @property
    def is_tiered(self) -> bool:
        return self.up_to_value is not None and self.above_value is not None


class SalesChannel(BaseModel):
    """Um canal de venda de um produto"""
    type: ChannelType
    is_active: bool = False
    data: CostData = Field(default_factory=CostData)


class ProductBase(BaseModel):
    """Dados do produto necessários para o cálculo (custo do item e imposto)"""
    cost_item: float = 0.0
    tax_percent: float = 0.0

    @field_validator("cost_item", "tax_percent", mode="before")
    @classmethod
    def _parse_number(cls, value):
        return parse_value(value)


class ValidationResult(BaseModel):
    """Resultado da validação de um canal"""
    is_valid: bool
    errors: List[str] = Field(default_factory=list)


COST_COMPONENTS = (
    "product_cost",
    "tax_cost",
    "commission_cost",
    "packaging_cost",
    "fixed_cost",
    "marketing_cost",
    "financial_cost",
    "shipping_cost",
    "prep_center_cost",
)


class CostBreakdown(BaseModel):
    """Composição dos custos: 9 componentes nomeados + total"""
    product_cost: float = 0.0
    tax_cost: float = 0.0
    commission_cost: float = 0.0
    packaging_cost: float = 0.0
    fixed_cost: float = 0.0
    marketing_cost: float = 0.0
    financial_cost: float = 0.0
    shipping_cost: float = 0.0
    prep_center_cost: float = 0.0
    total_costs: float = 0.0

    def components(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in COST_COMPONENTS}


class CalculationResult(BaseModel):
    """Resultado de lucratividade de um canal: válido e completo, ou inválido e zerado"""
    channel_type: ChannelType
    gross_revenue: float = 0.0
    net_revenue: float = 0.0
    rebate_income: float = 0.0
    costs: CostBreakdown = Field(default_factory=CostBreakdown)
    gross_profit: float = 0.0
    net_profit: float = 0.0
    margin_percent: float = 0.0
    roi_percent: float = 0.0
    is_profit: bool = False
    is_valid: bool = True
    errors: List[str] = Field(default_factory=list)

    @classmethod
    def invalid(cls, channel_type: ChannelType, errors: List[str]) -> "CalculationResult":
        """Resultado zerado com os erros de validação"""
        return cls(channel_type=channel_type, is_valid=False, errors=list(errors))


class PortfolioSummary(BaseModel):
    """Consolidação dos canais ativos de um produto"""
    results: Dict[ChannelType, CalculationResult] = Field(default_factory=dict)
    total_revenue: float = 0.0
    total_profit: float = 0.0
    average_margin: float = 0.0
    valid_channels: int = 0
    best_channel: Optional[ChannelType] = None
