import pytest
from pydantic import ValidationError

from profitability import (
    ChannelCategory,
    ChannelConfigError,
    ChannelMetadataRegistry,
    ChannelType,
    UnknownChannelError,
)


def test_registry_has_all_channel_types(registry):
    """Testa se o registry cobre todos os 14 tipos de canal"""
    channels = registry.get_supported_channels()

    assert isinstance(channels, list)
    assert len(channels) == 14
    assert set(channels) == {channel_type.value for channel_type in ChannelType}


def test_get_returns_metadata_for_every_channel(registry):
    """Testa se get retorna metadados para todos os canais"""
    for channel_type in ChannelType:
        metadata = registry.get(channel_type)
        assert metadata.display_name
        assert isinstance(metadata.category, ChannelCategory)


def test_get_unknown_channel_raises(registry):
    """Testa se canal inexistente é erro de programação (fatal)"""
    with pytest.raises(UnknownChannelError) as exc_info:
        registry.get("canal_inexistente")

    assert "não suportado" in str(exc_info.value)
    assert isinstance(exc_info.value, ChannelConfigError)
    assert isinstance(exc_info.value, ValueError)


def test_registry_without_channel_rejects_it():
    """Testa se um registry parcial rejeita tipos que não conhece"""
    partial = ChannelMetadataRegistry(
        {ChannelType.SHOPEE: ChannelMetadataRegistry.default().get(ChannelType.SHOPEE)}
    )

    assert partial.get_supported_channels() == ["SHOPEE"]
    with pytest.raises(UnknownChannelError):
        partial.get(ChannelType.AMAZON_FBA)


def test_resolve_is_case_insensitive(registry):
    """Testa se resolve aceita o nome em qualquer caixa"""
    assert registry.resolve("shopee") == ChannelType.SHOPEE
    assert registry.resolve(" Mercado_Livre_Full ") == ChannelType.MERCADO_LIVRE_FULL
    assert registry.resolve(ChannelType.AMAZON_DBA) == ChannelType.AMAZON_DBA


def test_is_supported(registry):
    """Testa método is_supported"""
    assert registry.is_supported("SITE_PROPRIO") is True
    assert registry.is_supported("magalu_full") is True
    assert registry.is_supported(ChannelType.TIKTOKSHOP_NORMAL) is True
    assert registry.is_supported("canal_inexistente") is False


def test_all_groups_channels_by_category(registry):
    """Testa agrupamento por categoria preservando a ordem de declaração"""
    grouped = registry.all()

    assert grouped[ChannelCategory.AMAZON] == [
        ChannelType.AMAZON_FBM,
        ChannelType.AMAZON_FBA_ONSITE,
        ChannelType.AMAZON_DBA,
        ChannelType.AMAZON_FBA,
    ]
    assert len(grouped[ChannelCategory.MERCADO_LIVRE]) == 4
    assert grouped[ChannelCategory.SITE] == [ChannelType.SITE_PROPRIO]
    assert sum(len(types) for types in grouped.values()) == 14


def test_metadata_is_read_only(registry):
    """Testa se os metadados não podem ser alterados"""
    metadata = registry.get(ChannelType.SHOPEE)

    with pytest.raises(ValidationError):
        metadata.display_name = "Outro nome"

    with pytest.raises(TypeError):
        metadata.default_costs["commission_percent"] = 99.0

    with pytest.raises(AttributeError):
        metadata.required_fields.append("price")

    with pytest.raises(AttributeError):
        metadata.product_code_fields.append("ean")

    fresh = ChannelMetadataRegistry.default().get(ChannelType.SHOPEE)
    assert fresh.default_costs["commission_percent"] == 14.0
    assert fresh.required_fields == ("commission_percent",)
    assert fresh.product_code_fields == ("id_produto",)


def test_metadata_serializes_to_plain_json(registry):
    """Testa se os custos padrão somente leitura viram dict comum no JSON"""
    dumped = registry.get(ChannelType.SHOPEE).model_dump(mode="json")

    assert dumped["default_costs"] == {"commission_percent": 14.0, "commission_max_value": 100.0}
    assert dumped["required_fields"] == ["commission_percent"]


def test_required_fields_are_cost_fields(registry):
    """Testa se todo campo obrigatório existe em CostData"""
    from profitability import CostData

    for channel_type in ChannelType:
        for field in registry.get(channel_type).required_fields:
            assert field in CostData.model_fields


def test_provision_creates_inactive_channel_with_defaults(registry):
    """Testa se o canal nasce inativo com os custos padrão"""
    channel = registry.provision(ChannelType.SHOPEE)

    assert channel.type == ChannelType.SHOPEE
    assert channel.is_active is False
    assert channel.data.commission_percent == 14.0
    assert channel.data.commission_max_value == 100.0
    assert channel.data.product_codes == {"id_produto": ""}


def test_provision_returns_independent_copies(registry):
    """Testa se alterar um canal provisionado não afeta outro nem o registry"""
    first = registry.provision(ChannelType.AMAZON_FBA, product_codes={"asin": "B0001"})
    first.data.product_codes["fnsku"] = "X0001"
    first.data.commission_percent = 30.0

    second = registry.provision(ChannelType.AMAZON_FBA)

    assert first.data.product_codes["asin"] == "B0001"
    assert second.data.product_codes == {"fnsku": "", "asin": ""}
    assert second.data.commission_percent == 15.0
    assert registry.get(ChannelType.AMAZON_FBA).default_costs["commission_percent"] == 15.0


def test_provision_all(registry):
    """Testa se provision_all cria um canal inativo por tipo"""
    channels = registry.provision_all()

    assert [channel.type for channel in channels] == list(ChannelType)
    assert all(not channel.is_active for channel in channels)
