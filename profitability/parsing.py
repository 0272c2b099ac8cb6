"""
Conversão de valores numéricos vindos dos formulários.
Aceita números, strings brasileiras ("R$ 1.234,56", "R$ 1.234", "12,5%") e vazio.
Valores não finitos (nan, inf) valem 0.
"""
import math
import re
from typing import Any, Optional

# "1.234", "12.345.678": ponto como separador de milhar
_THOUSANDS = re.compile(r"^-?[1-9]\d{0,2}(\.\d{3})+$")


def _finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _parse_text(value: str) -> Optional[float]:
    """Converte 'R$ 1.234,56' para 1234.56; string vazia vira None"""
    p = value.lower().replace("r$", "").replace("%", "").replace(" ", "").strip()
    if not p:
        return None

    # Com vírgula é formato brasileiro: ponto é separador de milhar
    if "," in p:
        p = p.replace(".", "").replace(",", ".")
    elif p.count(".") > 1 or _THOUSANDS.match(p):
        p = p.replace(".", "")

    try:
        return _finite(float(p))
    except ValueError:
        return 0.0


def parse_optional_value(value: Any) -> Optional[float]:
    """Converte um valor opcional; None e string vazia continuam None"""
    if value is None:
        return None

    if isinstance(value, bool):
        return float(value)

    if isinstance(value, (int, float)):
        try:
            return _finite(float(value))
        except OverflowError:
            return 0.0

    if isinstance(value, str):
        return _parse_text(value)

    return value


def parse_value(value: Any) -> float:
    """Converte um valor obrigatório; ausente vale 0"""
    parsed = parse_optional_value(value)
    return 0.0 if parsed is None else parsed
