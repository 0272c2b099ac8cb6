import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

from profitability.interface import (
    ChannelCategory,
    ChannelMetadata,
    ChannelType,
    CostData,
    SalesChannel,
    UnknownChannelError,
)

logger = logging.getLogger(__name__)

_AMAZON_CODES = ("fnsku", "asin")
_ML_CODES = ("mlb", "mlb_catalog")

# Tabela canônica: channel -> metadados
DEFAULT_CHANNEL_METADATA: Dict[ChannelType, ChannelMetadata] = {
    ChannelType.SITE_PROPRIO: ChannelMetadata(
        display_name="Site Próprio",
        category=ChannelCategory.SITE,
        description="Vendas através do site próprio da empresa",
        default_costs={"commission_percent": 0.0, "financial_cost_percent": 3.0, "marketing_cost_percent": 10.0},
        required_fields=("financial_cost_percent",),
        product_code_fields=("codigo_site",),
    ),
    ChannelType.AMAZON_FBM: ChannelMetadata(
        display_name="Amazon FBM",
        category=ChannelCategory.AMAZON,
        description="Fulfilled by Merchant: o vendedor envia o pedido",
        default_costs={"commission_percent": 15.0},
        required_fields=("commission_percent", "shipping_cost_value"),
        product_code_fields=_AMAZON_CODES,
    ),
    ChannelType.AMAZON_FBA_ONSITE: ChannelMetadata(
        display_name="Amazon FBA On Site",
        category=ChannelCategory.AMAZON,
        description="FBA com estoque e fulfillment no local do vendedor",
        default_costs={"commission_percent": 15.0},
        required_fields=("commission_percent", "shipping_cost_value"),
        product_code_fields=_AMAZON_CODES,
    ),
    ChannelType.AMAZON_DBA: ChannelMetadata(
        display_name="Amazon DBA",
        category=ChannelCategory.AMAZON,
        description="Delivery by Amazon: coleta na porta do vendedor",
        default_costs={"commission_percent": 15.0},
        required_fields=("commission_percent", "shipping_cost_value"),
        product_code_fields=_AMAZON_CODES,
    ),
    ChannelType.AMAZON_FBA: ChannelMetadata(
        display_name="Amazon FBA",
        category=ChannelCategory.AMAZON,
        description="Fulfilled by Amazon: estoque no centro de distribuição",
        default_costs={"commission_percent": 15.0},
        required_fields=("commission_percent", "shipping_cost_value", "prep_center_cost_value"),
        product_code_fields=_AMAZON_CODES,
    ),
    ChannelType.MERCADO_LIVRE_ME1: ChannelMetadata(
        display_name="Mercado Livre ME1",
        category=ChannelCategory.MERCADO_LIVRE,
        description="Mercado Envios 1: frete por conta do vendedor",
        default_costs={"commission_percent": 16.0},
        required_fields=("commission_percent", "shipping_cost_value"),
        product_code_fields=_ML_CODES,
    ),
    ChannelType.MERCADO_LIVRE_FLEX: ChannelMetadata(
        display_name="Mercado Livre Flex",
        category=ChannelCategory.MERCADO_LIVRE,
        description="Entrega no mesmo dia pelo próprio vendedor",
        default_costs={"commission_percent": 16.0},
        required_fields=("commission_percent",),
        product_code_fields=_ML_CODES,
    ),
    ChannelType.MERCADO_LIVRE_ENVIOS: ChannelMetadata(
        display_name="Mercado Livre Envios",
        category=ChannelCategory.MERCADO_LIVRE,
        description="Mercado Envios com coleta",
        default_costs={"commission_percent": 16.0},
        required_fields=("commission_percent",),
        product_code_fields=_ML_CODES,
    ),
    ChannelType.MERCADO_LIVRE_FULL: ChannelMetadata(
        display_name="Mercado Livre Full",
        category=ChannelCategory.MERCADO_LIVRE,
        description="Estoque no centro de distribuição do Mercado Livre",
        default_costs={"commission_percent": 16.0},
        required_fields=("commission_percent", "shipping_cost_value"),
        product_code_fields=_ML_CODES,
    ),
    ChannelType.SHOPEE: ChannelMetadata(
        display_name="Shopee",
        category=ChannelCategory.SHOPEE,
        description="Marketplace Shopee (comissão com teto por item)",
        default_costs={"commission_percent": 14.0, "commission_max_value": 100.0},
        required_fields=("commission_percent",),
        product_code_fields=("id_produto",),
    ),
    ChannelType.MAGALU_FULL: ChannelMetadata(
        display_name="Magalu Full",
        category=ChannelCategory.MAGALU,
        description="Estoque no centro de distribuição do Magalu",
        default_costs={"commission_percent": 16.0},
        required_fields=("commission_percent",),
        product_code_fields=("sku_magalu",),
    ),
    ChannelType.MAGALU_ENVIOS: ChannelMetadata(
        display_name="Magalu Envios",
        category=ChannelCategory.MAGALU,
        description="Magalu Entregas com coleta",
        default_costs={"commission_percent": 16.0},
        required_fields=("commission_percent", "shipping_cost_value"),
        product_code_fields=("sku_magalu",),
    ),
    ChannelType.TIKTOKSHOP_NORMAL: ChannelMetadata(
        display_name="TikTok Shop",
        category=ChannelCategory.TIKTOK,
        description="TikTok Shop com envio padrão",
        default_costs={"commission_percent": 6.0},
        required_fields=("commission_percent",),
        product_code_fields=("id_produto",),
    ),
    ChannelType.MARKETPLACE_OTHER: ChannelMetadata(
        display_name="Outro Marketplace",
        category=ChannelCategory.OTHER,
        description="Qualquer outro marketplace",
        default_costs={},
        required_fields=(),
        product_code_fields=("id_produto",),
    ),
}

FIELD_LABELS: Dict[str, str] = {
    "price": "Preço de venda",
    "commission_percent": "Comissão %",
    "commission_up_to_value": "Comissão até o valor R$",
    "commission_above_value": "Comissão acima do valor %",
    "commission_min_value": "Comissão mínima R$",
    "commission_max_value": "Comissão máxima R$",
    "packaging_cost_value": "Custo de embalagem R$",
    "fixed_cost_percent": "Custo fixo %",
    "marketing_cost_percent": "Custo de marketing %",
    "financial_cost_percent": "Custo financeiro %",
    "shipping_cost_value": "Custo de frete R$",
    "prep_center_cost_value": "Custo de prep center R$",
    "rebate_value": "Rebate R$",
}


class ChannelMetadataRegistry:
    """
    Registry de metadados por canal.

    Construído uma única vez na inicialização e injetado no engine; o mapeamento
    interno é somente leitura.
    """

    def __init__(self, metadata: Mapping[ChannelType, ChannelMetadata]):
        self._metadata = MappingProxyType(dict(metadata))

    @classmethod
    def default(cls) -> "ChannelMetadataRegistry":
        """Registry com os 14 canais padrão"""
        return cls(DEFAULT_CHANNEL_METADATA)

    def resolve(self, channel: Union[ChannelType, str]) -> ChannelType:
        """
        Converte o nome do canal (case-insensitive) em ChannelType.

        Raises:
            UnknownChannelError: Se o canal não for suportado
        """
        if isinstance(channel, ChannelType) and channel in self._metadata:
            return channel

        name = str(getattr(channel, "value", channel)).upper().strip()
        for channel_type in self._metadata:
            if channel_type.value == name:
                return channel_type

        supported = ", ".join(self.get_supported_channels())
        logger.error(f"Canal desconhecido solicitado: {channel!r}")
        raise UnknownChannelError(
            f"Canal '{channel}' não suportado. "
            f"Canais disponíveis: {supported}"
        )

    def get(self, channel: Union[ChannelType, str]) -> ChannelMetadata:
        """Retorna os metadados do canal"""
        return self._metadata[self.resolve(channel)]

    def all(self) -> Dict[ChannelCategory, List[ChannelType]]:
        """Canais agrupados por categoria, na ordem de declaração"""
        grouped: Dict[ChannelCategory, List[ChannelType]] = {}
        for channel_type, metadata in self._metadata.items():
            grouped.setdefault(metadata.category, []).append(channel_type)
        return grouped

    def get_supported_channels(self) -> List[str]:
        """Retorna lista de canais suportados"""
        return [channel_type.value for channel_type in self._metadata]

    def is_supported(self, channel: Union[ChannelType, str]) -> bool:
        """Verifica se um canal é suportado"""
        name = str(getattr(channel, "value", channel)).upper().strip()
        return any(channel_type.value == name for channel_type in self._metadata)

    def field_label(self, field: str) -> str:
        return FIELD_LABELS.get(field, field)

    def provision(self, channel: Union[ChannelType, str], product_codes: Optional[Dict[str, str]] = None) -> SalesChannel:
        """
        Cria o canal inativo com os custos padrão do registry.

        Cada chamada devolve uma cópia nova; os metadados nunca são alterados.
        """
        channel_type = self.resolve(channel)
        metadata = self._metadata[channel_type]

        codes = {field: "" for field in metadata.product_code_fields}
        codes.update(product_codes or {})

        data = CostData(**dict(metadata.default_costs), product_codes=codes)
        return SalesChannel(type=channel_type, is_active=False, data=data)

    def provision_all(self) -> List[SalesChannel]:
        """Canais de um produto recém-cadastrado, todos inativos"""
        return [self.provision(channel_type) for channel_type in self._metadata]
