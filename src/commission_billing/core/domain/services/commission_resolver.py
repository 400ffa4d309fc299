"""
Resolução de comissão em dois níveis.

1. percentual do procedimento, se presente e diferente de zero → PROCEDURE
2. senão, percentual geral do dentista, se presente e diferente de zero → GENERAL
3. senão, comissão zero, classificada como GENERAL

Aritmética em Decimal sem arredondamento; a quantização acontece só na
fronteira de apresentação (DTOs).
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from commission_billing.core.domain.entities.financial_transaction_entity import CommissionType

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True, slots=True)
class CommissionResolution:
    amount: Decimal
    tier: CommissionType


def _as_decimal(value) -> Decimal | None:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def resolve_commission(
    gross_value,
    procedure_commission_pct=None,
    dentist_general_commission_pct=None,
) -> CommissionResolution:
    gross = _as_decimal(gross_value)
    procedure_pct = _as_decimal(procedure_commission_pct)
    general_pct = _as_decimal(dentist_general_commission_pct)

    if procedure_pct:
        return CommissionResolution(gross * procedure_pct / HUNDRED, CommissionType.PROCEDURE)
    if general_pct:
        return CommissionResolution(gross * general_pct / HUNDRED, CommissionType.GENERAL)
    return CommissionResolution(ZERO, CommissionType.GENERAL)
