# -*- coding: utf-8 -*-
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from config import settings
from profitability import (
    CalculationResult,
    ChannelConfigError,
    ChannelMetadataRegistry,
    ChannelValidator,
    MultiChannelAggregator,
    PortfolioSummary,
    ProductBase,
    ProfitabilityEngine,
    SalesChannel,
    profitability_status,
)

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Channel Profitability API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Estado somente leitura, montado uma única vez na inicialização
registry = ChannelMetadataRegistry.default()
engine = ProfitabilityEngine(
    registry,
    validator=ChannelValidator.from_settings(registry, settings),
    target_price_max_iterations=settings.target_price_max_iterations,
)
aggregator = MultiChannelAggregator(engine)


def _config_error(e: ChannelConfigError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "message": str(e),
            "supported_channels": registry.get_supported_channels()
        }
    )


# ============================================================================
# PROFITABILITY ENDPOINTS
# ============================================================================

class EvaluateRequest(BaseModel):
    """Request para cálculo de lucratividade de um canal"""
    channel: SalesChannel
    product: ProductBase


class EvaluateResponse(CalculationResult):
    """Resultado do canal com o status textual da margem"""
    status: str


class PortfolioRequest(BaseModel):
    """Request para consolidação dos canais de um produto"""
    channels: List[SalesChannel] = Field(default_factory=list)
    product: ProductBase


class TargetPriceRequest(BaseModel):
    """Request para preço que atinge a margem alvo"""
    channel: SalesChannel
    product: ProductBase
    target_margin_percent: float = Field(..., lt=100, description="Margem desejada em %")


class TargetPriceResponse(BaseModel):
    price: Optional[float] = None
    channel: str
    target_margin_percent: float


@app.get("/profitability/channels")
async def profitability_channels():
    """
    Lista canais suportados agrupados por categoria, com seus metadados.
    """
    categories: Dict[str, List[Dict[str, Any]]] = {}
    for category, channel_types in registry.all().items():
        categories[category.value] = [
            {"type": channel_type.value, **registry.get(channel_type).model_dump(mode="json")}
            for channel_type in channel_types
        ]

    return {
        "supported_channels": registry.get_supported_channels(),
        "categories": categories
    }


@app.post("/profitability/evaluate", response_model=EvaluateResponse)
async def profitability_evaluate(request: EvaluateRequest):
    """
    Calcula a lucratividade do canal.

    Dados inválidos não geram erro HTTP: o resultado volta zerado com is_valid=False
    e a lista de erros, para o formulário exibir no lugar dos números.
    """
    result = engine.evaluate(request.channel, request.product)
    return EvaluateResponse(**result.model_dump(), status=profitability_status(result.margin_percent))


@app.post("/profitability/validate")
async def profitability_validate(request: EvaluateRequest):
    """
    Valida os dados do canal.

    Returns:
        200: Válido
        422: Inválido (com a lista de erros)
    """
    validation = engine.validator.validate(
        request.channel, request.product.cost_item, request.product.tax_percent
    )

    if not validation.is_valid:
        raise HTTPException(
            status_code=422,
            detail={"errors": validation.errors}
        )

    return {"valid": True, "message": "Entrada válida"}


@app.post("/profitability/portfolio", response_model=PortfolioSummary)
async def profitability_portfolio(request: PortfolioRequest):
    """
    Consolida os canais ativos do produto (receita, lucro e margem média).
    """
    try:
        return aggregator.evaluate_portfolio(request.channels, request.product)
    except ChannelConfigError as e:
        raise _config_error(e)


@app.post("/profitability/target-price", response_model=TargetPriceResponse)
async def profitability_target_price(request: TargetPriceRequest):
    """
    Calcula o menor preço que atinge a margem alvo no canal.
    price=None quando a margem é inatingível com os custos informados.
    """
    price = engine.target_price(request.channel, request.product, request.target_margin_percent)
    logger.info(
        f"[{request.channel.type.value}] Preço alvo para margem {request.target_margin_percent:.2f}%: {price}"
    )
    return TargetPriceResponse(
        price=price,
        channel=request.channel.type.value,
        target_margin_percent=request.target_margin_percent
    )


@app.post("/profitability/provision", response_model=List[SalesChannel])
async def profitability_provision():
    """
    Canais de um produto recém-cadastrado: todos inativos, com os custos padrão.
    """
    return registry.provision_all()


@app.get("/profitability/channels/{channel}")
async def profitability_channel_metadata(channel: str):
    """
    Metadados de um canal (nome case-insensitive).
    """
    try:
        channel_type = registry.resolve(channel)
    except ChannelConfigError as e:
        raise _config_error(e)

    return {"type": channel_type.value, **registry.get(channel_type).model_dump(mode="json")}
