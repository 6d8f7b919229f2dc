"""
Domain Models for the Pay-Plan Commission Engine

These dataclasses provide type-safe representations of pay plans, deal inputs
and payout results. All monetary values use Decimal for precision.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

SALESPERSON = "salesperson"
FINANCE_MANAGER = "finance_manager"
FINANCE_DIRECTOR = "finance_director"
SALES_MANAGER = "sales_manager"
GENERAL_MANAGER = "general_manager"

ROLES = (SALESPERSON, FINANCE_MANAGER, FINANCE_DIRECTOR, SALES_MANAGER, GENERAL_MANAGER)
PLAN_TYPES = ("simple", "advanced")

# Largest power of ten a form figure may carry (hundreds of billions)
MAX_MAGNITUDE = 11

FALSE_FLAGS = ("false", "0", "", "no", "off", "n")


# =============================================================================
# NUMERIC PARSING
# =============================================================================


def to_decimal(value) -> Decimal:
    """Parse a user-entered figure, defaulting to zero.

    Deal and plan forms are lenient: blank, missing, non-numeric and
    non-finite values all read as zero instead of failing the calculation.
    Figures beyond MAX_MAGNITUDE are treated as malformed.
    Currency formatting ("$1,250.00") is accepted.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, str):
        value = value.strip().replace(",", "").replace("$", "")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not result.is_finite() or result.adjusted() > MAX_MAGNITUDE:
        return ZERO
    return result


def to_units(value) -> int:
    """Parse a unit count, truncating fractions and defaulting to zero."""
    return int(to_decimal(value))


def to_flag(value) -> bool:
    """Parse a checkbox or toggle value. Form strings such as "false" and "0" read as False."""
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_FLAGS
    return bool(value)


def _optional_decimal(value) -> Decimal | None:
    return None if value is None else to_decimal(value)


# =============================================================================
# SHARED PLAN STRUCTURES
# =============================================================================


@dataclass
class DrawStructure:
    """Draw paid against future commissions."""

    enabled: bool = False
    amount: Decimal = ZERO
    frequency: str = "monthly"  # 'weekly', 'bi-weekly' or 'monthly'
    deducted_from_commissions: bool = True

    @classmethod
    def from_dict(cls, data: dict | None) -> "DrawStructure":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            amount=to_decimal(data.get("amount")),
            frequency=data.get("frequency", "monthly"),
            deducted_from_commissions=to_flag(data.get("deducted_from_commissions", True)),
        )


@dataclass
class VehicleAllowance:
    enabled: bool = False
    allowance_amount: Decimal = ZERO
    demo_privileges_available: bool = False
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "VehicleAllowance":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            allowance_amount=to_decimal(data.get("allowance_amount")),
            demo_privileges_available=to_flag(data.get("demo_privileges_available", False)),
            description=data.get("description", ""),
        )


@dataclass
class PTOStructure:
    enabled: bool = False
    annual_days: int = 0
    prorated: bool = False
    cash_value_per_day: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> "PTOStructure":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            annual_days=to_units(data.get("annual_days")),
            prorated=to_flag(data.get("prorated", False)),
            cash_value_per_day=_optional_decimal(data.get("cash_value_per_day")),
        )


@dataclass
class ProviderBonus:
    """Product-provider incentive (EasyCare, JM Family, ...)."""

    provider_name: str
    commission_percentage: Decimal = ZERO
    enabled: bool = True
    payment_frequency: str = "monthly"
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ProviderBonus":
        return cls(
            provider_name=data.get("provider_name", ""),
            commission_percentage=to_decimal(data.get("commission_percentage")),
            enabled=to_flag(data.get("enabled", True)),
            payment_frequency=data.get("payment_frequency", "monthly"),
            description=data.get("description", ""),
        )


# =============================================================================
# SALESPERSON STRUCTURES
# =============================================================================


@dataclass
class UnitFlatTier:
    """Flat front-end amount once min_units is reached.

    Retroactive tiers pay flat_amount for every unit sold; otherwise the
    flat_amount is paid once for crossing the threshold.
    """

    min_units: int
    flat_amount: Decimal
    max_units: int | None = None
    retroactive: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "UnitFlatTier":
        max_units = data.get("max_units")
        return cls(
            min_units=to_units(data.get("min_units")),
            flat_amount=to_decimal(data.get("flat_amount")),
            max_units=to_units(max_units) if max_units is not None else None,
            retroactive=to_flag(data.get("retroactive", False)),
        )


@dataclass
class UnitFlatStructure:
    enabled: bool = False
    tiers: list[UnitFlatTier] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "UnitFlatStructure":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            tiers=[UnitFlatTier.from_dict(t) for t in data.get("tiers") or []],
        )


@dataclass
class FrontEndCommission:
    gross_percentage: Decimal = ZERO
    take_higher: bool = False
    unit_flat_structure: UnitFlatStructure = field(default_factory=UnitFlatStructure)

    @classmethod
    def from_dict(cls, data: dict | None) -> "FrontEndCommission":
        data = data or {}
        return cls(
            gross_percentage=to_decimal(data.get("gross_percentage")),
            take_higher=to_flag(data.get("take_higher", False)),
            unit_flat_structure=UnitFlatStructure.from_dict(data.get("unit_flat_structure")),
        )


@dataclass
class BackEndTier:
    """Back-end percentage unlocked by monthly volume."""

    min_units: int
    percentage: Decimal
    max_units: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "BackEndTier":
        max_units = data.get("max_units")
        return cls(
            min_units=to_units(data.get("min_units")),
            percentage=to_decimal(data.get("percentage")),
            max_units=to_units(max_units) if max_units is not None else None,
        )


@dataclass
class BackEndCommission:
    enabled: bool = False
    base_percentage: Decimal = ZERO
    tiers: list[BackEndTier] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "BackEndCommission":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            base_percentage=to_decimal(data.get("base_percentage")),
            tiers=[BackEndTier.from_dict(t) for t in data.get("tiers") or []],
        )


@dataclass
class HighValuePack:
    threshold: Decimal = ZERO
    pack_amount: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict | None) -> "HighValuePack":
        data = data or {}
        return cls(
            threshold=to_decimal(data.get("threshold")),
            pack_amount=to_decimal(data.get("pack_amount")),
        )


@dataclass
class LowValuePack:
    """Pack for vehicles valued in [min_threshold, max_threshold)."""

    min_threshold: Decimal = ZERO
    max_threshold: Decimal = ZERO
    pack_amount: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict | None) -> "LowValuePack":
        data = data or {}
        return cls(
            min_threshold=to_decimal(data.get("min_threshold")),
            max_threshold=to_decimal(data.get("max_threshold")),
            pack_amount=to_decimal(data.get("pack_amount")),
        )


@dataclass
class UsedVehiclePack:
    enabled: bool = False
    high_value_pack: HighValuePack = field(default_factory=HighValuePack)
    low_value_pack: LowValuePack = field(default_factory=LowValuePack)

    @classmethod
    def from_dict(cls, data: dict | None) -> "UsedVehiclePack":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            high_value_pack=HighValuePack.from_dict(data.get("high_value_pack")),
            low_value_pack=LowValuePack.from_dict(data.get("low_value_pack")),
        )


@dataclass
class BenchmarkBonus:
    enabled: bool = False
    bonus_percentage: Decimal = ZERO
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> "BenchmarkBonus":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            bonus_percentage=to_decimal(data.get("bonus_percentage")),
            description=data.get("description", ""),
        )


@dataclass
class CSIBonus:
    enabled: bool = False
    benchmark_bonus: BenchmarkBonus = field(default_factory=BenchmarkBonus)

    @classmethod
    def from_dict(cls, data: dict | None) -> "CSIBonus":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            benchmark_bonus=BenchmarkBonus.from_dict(data.get("benchmark_bonus")),
        )


@dataclass
class GuaranteeTier:
    min_units: int
    guarantee_amount: Decimal
    max_units: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "GuaranteeTier":
        max_units = data.get("max_units")
        return cls(
            min_units=to_units(data.get("min_units")),
            guarantee_amount=to_decimal(data.get("guarantee_amount")),
            max_units=to_units(max_units) if max_units is not None else None,
        )


@dataclass
class MinimumGuarantee:
    enabled: bool = False
    tiers: list[GuaranteeTier] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "MinimumGuarantee":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            tiers=[GuaranteeTier.from_dict(t) for t in data.get("tiers") or []],
        )


# =============================================================================
# FINANCE STRUCTURES
# =============================================================================


@dataclass
class CommissionTier:
    """PVR band; max_value of None means open-ended."""

    min_value: Decimal
    percentage: Decimal
    max_value: Decimal | None = None
    label: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CommissionTier":
        return cls(
            min_value=to_decimal(data.get("min_value")),
            percentage=to_decimal(data.get("percentage")),
            max_value=_optional_decimal(data.get("max_value")),
            label=data.get("label", ""),
        )


@dataclass
class PVRCommissionStructure:
    enabled: bool = False
    base_percentage: Decimal = ZERO
    tiers: list[CommissionTier] = field(default_factory=list)
    applies_to: str = "total_fi_income"  # 'front_end', 'back_end' or 'total_fi_income'

    @classmethod
    def from_dict(cls, data: dict | None) -> "PVRCommissionStructure":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            base_percentage=to_decimal(data.get("base_percentage")),
            tiers=[CommissionTier.from_dict(t) for t in data.get("tiers") or []],
            applies_to=data.get("applies_to", "total_fi_income"),
        )


@dataclass
class BonusTier:
    """Bonus percentage for a [minimum, maximum] band of a count or percentage."""

    minimum: Decimal
    bonus_percentage: Decimal
    maximum: Decimal | None = None

    @classmethod
    def from_dict(cls, data: dict, min_key: str, max_key: str) -> "BonusTier":
        return cls(
            minimum=to_decimal(data.get(min_key)),
            bonus_percentage=to_decimal(data.get("bonus_percentage")),
            maximum=_optional_decimal(data.get(max_key)),
        )


@dataclass
class TieredBonus:
    enabled: bool = False
    tiers: list[BonusTier] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None, min_key: str, max_key: str) -> "TieredBonus":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            tiers=[BonusTier.from_dict(t, min_key, max_key) for t in data.get("tiers") or []],
        )


@dataclass
class CITBonusStructure:
    enabled: bool = False
    cit_30_bonus: TieredBonus = field(default_factory=TieredBonus)
    cit_10_bonus: TieredBonus = field(default_factory=TieredBonus)

    @classmethod
    def from_dict(cls, data: dict | None) -> "CITBonusStructure":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            cit_30_bonus=TieredBonus.from_dict(data.get("cit_30_bonus"), "min_deals", "max_deals"),
            cit_10_bonus=TieredBonus.from_dict(data.get("cit_10_bonus"), "min_deals", "max_deals"),
        )


@dataclass
class PenetrationBonus:
    name: str
    enabled: bool = False
    tiers: list[BonusTier] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "PenetrationBonus":
        return cls(
            name=data.get("name", ""),
            enabled=to_flag(data.get("enabled", False)),
            tiers=[
                BonusTier.from_dict(t, "min_percentage", "max_percentage")
                for t in data.get("tiers") or []
            ],
        )


@dataclass
class ChargebackProtection:
    enabled: bool = False
    protection_period_days: int = 0

    @classmethod
    def from_dict(cls, data: dict | None) -> "ChargebackProtection":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            protection_period_days=to_units(data.get("protection_period_days")),
        )


# =============================================================================
# MANAGER STRUCTURES
# =============================================================================


@dataclass
class TeamBonuses:
    unit_bonus_per_sale: Decimal = ZERO
    gross_percentage: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict | None) -> "TeamBonuses":
        data = data or {}
        return cls(
            unit_bonus_per_sale=to_decimal(data.get("unit_bonus_per_sale")),
            gross_percentage=to_decimal(data.get("gross_percentage")),
        )


@dataclass
class PersonalSales:
    enabled: bool = False
    front_end_gross_percentage: Decimal = ZERO
    back_end_gross_percentage: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict | None) -> "PersonalSales":
        data = data or {}
        return cls(
            enabled=to_flag(data.get("enabled", False)),
            front_end_gross_percentage=to_decimal(data.get("front_end_gross_percentage")),
            back_end_gross_percentage=to_decimal(data.get("back_end_gross_percentage")),
        )


@dataclass
class DealershipBonuses:
    monthly_unit_threshold: int = 0
    unit_bonus: Decimal = ZERO
    gross_profit_percentage: Decimal = ZERO
    csi_bonus_threshold: Decimal = ZERO
    csi_bonus_amount: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict | None) -> "DealershipBonuses":
        data = data or {}
        return cls(
            monthly_unit_threshold=to_units(data.get("monthly_unit_threshold")),
            unit_bonus=to_decimal(data.get("unit_bonus")),
            gross_profit_percentage=to_decimal(data.get("gross_profit_percentage")),
            csi_bonus_threshold=to_decimal(data.get("csi_bonus_threshold")),
            csi_bonus_amount=to_decimal(data.get("csi_bonus_amount")),
        )


# =============================================================================
# PAY PLAN VARIANTS
# =============================================================================


@dataclass
class PayPlan:
    """Fields shared by every plan variant. Variants are keyed by (role, plan_type)."""

    name: str
    role: str
    plan_type: str
    id: str = ""
    description: str = ""
    dealership_id: str = ""
    is_active: bool = True

    @staticmethod
    def _base_fields(data: dict) -> dict:
        return {
            "name": data.get("name", ""),
            "role": data["role"],
            "plan_type": data["plan_type"],
            "id": data.get("id", ""),
            "description": data.get("description", ""),
            "dealership_id": data.get("dealership_id", ""),
            "is_active": to_flag(data.get("is_active", True)),
        }


@dataclass
class SimpleSalespersonPlan(PayPlan):
    front_end_gross_percentage: Decimal = ZERO
    back_end_gross_percentage: Decimal = ZERO
    minimum_monthly_pay: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict) -> "SimpleSalespersonPlan":
        return cls(
            **cls._base_fields(data),
            front_end_gross_percentage=to_decimal(data.get("front_end_gross_percentage")),
            back_end_gross_percentage=to_decimal(data.get("back_end_gross_percentage")),
            minimum_monthly_pay=to_decimal(data.get("minimum_monthly_pay")),
        )


@dataclass
class AdvancedSalespersonPlan(PayPlan):
    front_end_commission: FrontEndCommission = field(default_factory=FrontEndCommission)
    back_end_commission: BackEndCommission = field(default_factory=BackEndCommission)
    used_vehicle_pack: UsedVehiclePack = field(default_factory=UsedVehiclePack)
    csi_bonus: CSIBonus = field(default_factory=CSIBonus)
    minimum_guarantee: MinimumGuarantee = field(default_factory=MinimumGuarantee)
    draw_structure: DrawStructure = field(default_factory=DrawStructure)
    vehicle_allowance: VehicleAllowance = field(default_factory=VehicleAllowance)
    pto_structure: PTOStructure = field(default_factory=PTOStructure)
    minimum_monthly_pay: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict) -> "AdvancedSalespersonPlan":
        return cls(
            **cls._base_fields(data),
            front_end_commission=FrontEndCommission.from_dict(data.get("front_end_commission")),
            back_end_commission=BackEndCommission.from_dict(data.get("back_end_commission")),
            used_vehicle_pack=UsedVehiclePack.from_dict(data.get("used_vehicle_pack")),
            csi_bonus=CSIBonus.from_dict(data.get("csi_bonus")),
            minimum_guarantee=MinimumGuarantee.from_dict(data.get("minimum_guarantee")),
            draw_structure=DrawStructure.from_dict(data.get("draw_structure")),
            vehicle_allowance=VehicleAllowance.from_dict(data.get("vehicle_allowance")),
            pto_structure=PTOStructure.from_dict(data.get("pto_structure")),
            minimum_monthly_pay=to_decimal(data.get("minimum_monthly_pay")),
        )


@dataclass
class SimpleFinanceManagerPlan(PayPlan):
    base_fi_percentage: Decimal = ZERO
    pvr_tiers: list[CommissionTier] = field(default_factory=list)
    monthly_draw: Decimal = ZERO
    provider_bonuses: list[ProviderBonus] = field(default_factory=list)
    vehicle_allowance: VehicleAllowance = field(default_factory=VehicleAllowance)
    pto_structure: PTOStructure = field(default_factory=PTOStructure)

    @classmethod
    def from_dict(cls, data: dict) -> "SimpleFinanceManagerPlan":
        structure = data.get("commission_structure") or {}
        return cls(
            **cls._base_fields(data),
            base_fi_percentage=to_decimal(structure.get("base_fi_percentage")),
            pvr_tiers=[CommissionTier.from_dict(t) for t in structure.get("pvr_tiers") or []],
            monthly_draw=to_decimal(data.get("monthly_draw")),
            provider_bonuses=[ProviderBonus.from_dict(p) for p in data.get("provider_bonuses") or []],
            vehicle_allowance=VehicleAllowance.from_dict(data.get("vehicle_allowance")),
            pto_structure=PTOStructure.from_dict(data.get("pto_structure")),
        )


@dataclass
class AdvancedFinanceManagerPlan(PayPlan):
    base_commission: PVRCommissionStructure = field(default_factory=PVRCommissionStructure)
    draw_structure: DrawStructure = field(default_factory=DrawStructure)
    cit_bonuses: CITBonusStructure = field(default_factory=CITBonusStructure)
    penetration_bonuses: list[PenetrationBonus] = field(default_factory=list)
    provider_bonuses: list[ProviderBonus] = field(default_factory=list)
    vehicle_allowance: VehicleAllowance = field(default_factory=VehicleAllowance)
    pto_structure: PTOStructure = field(default_factory=PTOStructure)
    chargeback_protection: ChargebackProtection = field(default_factory=ChargebackProtection)
    minimum_monthly_pay: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict) -> "AdvancedFinanceManagerPlan":
        return cls(
            **cls._base_fields(data),
            base_commission=PVRCommissionStructure.from_dict(data.get("base_commission")),
            draw_structure=DrawStructure.from_dict(data.get("draw_structure")),
            cit_bonuses=CITBonusStructure.from_dict(data.get("cit_bonuses")),
            penetration_bonuses=[
                PenetrationBonus.from_dict(p) for p in data.get("penetration_bonuses") or []
            ],
            provider_bonuses=[ProviderBonus.from_dict(p) for p in data.get("provider_bonuses") or []],
            vehicle_allowance=VehicleAllowance.from_dict(data.get("vehicle_allowance")),
            pto_structure=PTOStructure.from_dict(data.get("pto_structure")),
            chargeback_protection=ChargebackProtection.from_dict(data.get("chargeback_protection")),
            minimum_monthly_pay=to_decimal(data.get("minimum_monthly_pay")),
        )


@dataclass
class SalesManagerPlan(PayPlan):
    base_salary: Decimal = ZERO
    team_bonuses: TeamBonuses = field(default_factory=TeamBonuses)
    personal_sales: PersonalSales = field(default_factory=PersonalSales)
    vehicle_allowance: VehicleAllowance = field(default_factory=VehicleAllowance)
    pto_structure: PTOStructure = field(default_factory=PTOStructure)

    @classmethod
    def from_dict(cls, data: dict) -> "SalesManagerPlan":
        return cls(
            **cls._base_fields(data),
            base_salary=to_decimal(data.get("base_salary")),
            team_bonuses=TeamBonuses.from_dict(data.get("team_bonuses")),
            personal_sales=PersonalSales.from_dict(data.get("personal_sales")),
            vehicle_allowance=VehicleAllowance.from_dict(data.get("vehicle_allowance")),
            pto_structure=PTOStructure.from_dict(data.get("pto_structure")),
        )


@dataclass
class GeneralManagerPlan(PayPlan):
    base_salary: Decimal = ZERO
    dealership_bonuses: DealershipBonuses = field(default_factory=DealershipBonuses)
    vehicle_allowance: VehicleAllowance = field(default_factory=VehicleAllowance)
    pto_structure: PTOStructure = field(default_factory=PTOStructure)

    @classmethod
    def from_dict(cls, data: dict) -> "GeneralManagerPlan":
        return cls(
            **cls._base_fields(data),
            base_salary=to_decimal(data.get("base_salary")),
            dealership_bonuses=DealershipBonuses.from_dict(data.get("dealership_bonuses")),
            vehicle_allowance=VehicleAllowance.from_dict(data.get("vehicle_allowance")),
            pto_structure=PTOStructure.from_dict(data.get("pto_structure")),
        )


PLAN_VARIANTS: dict[tuple[str, str], type[PayPlan]] = {
    (SALESPERSON, "simple"): SimpleSalespersonPlan,
    (SALESPERSON, "advanced"): AdvancedSalespersonPlan,
    (FINANCE_MANAGER, "simple"): SimpleFinanceManagerPlan,
    (FINANCE_MANAGER, "advanced"): AdvancedFinanceManagerPlan,
    (FINANCE_DIRECTOR, "simple"): SimpleFinanceManagerPlan,
    (FINANCE_DIRECTOR, "advanced"): AdvancedFinanceManagerPlan,
    (SALES_MANAGER, "simple"): SalesManagerPlan,
    (SALES_MANAGER, "advanced"): SalesManagerPlan,
    (GENERAL_MANAGER, "simple"): GeneralManagerPlan,
    (GENERAL_MANAGER, "advanced"): GeneralManagerPlan,
}


def plan_from_dict(data: dict) -> PayPlan:
    """Build the plan variant matching the document's (role, plan_type)."""
    key = (data.get("role"), data.get("plan_type"))
    variant = PLAN_VARIANTS.get(key)
    if variant is None:
        raise ValueError(f"Unknown pay plan kind: role={key[0]!r}, plan_type={key[1]!r}")
    return variant.from_dict(data)


# =============================================================================
# DEAL INPUTS
# =============================================================================


@dataclass
class DealInputs:
    """Figures for one calculation request."""

    units_sold: int = 0
    front_end_gross_profit: Decimal = ZERO
    back_end_gross_profit: Decimal = ZERO
    vehicle_type: str = "new"  # 'new' or 'used'
    vehicle_value: Decimal = ZERO
    csi_above_benchmark: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "DealInputs":
        return cls(
            units_sold=to_units(data.get("units_sold")),
            front_end_gross_profit=to_decimal(data.get("front_end_gross_profit")),
            back_end_gross_profit=to_decimal(data.get("back_end_gross_profit")),
            vehicle_type=str(data.get("vehicle_type") or "new").lower(),
            vehicle_value=to_decimal(data.get("vehicle_value")),
            csi_above_benchmark=to_flag(data.get("csi_above_benchmark", False)),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass
class FrontEndCalculation:
    """Results of the front-end commission step."""

    adjusted_front_end_profit: Decimal = ZERO
    percentage_amount: Decimal = ZERO
    unit_flat_amount: Decimal = ZERO
    commission: Decimal = ZERO
    used_higher_amount: bool = False


@dataclass
class BackEndCalculation:
    """Results of the back-end commission step.

    commission excludes csi_bonus; the two are summed for the total.
    """

    percentage: Decimal = ZERO
    commission: Decimal = ZERO
    csi_bonus: Decimal = ZERO


@dataclass
class EvaluationContext:
    """
    Holds all intermediate state while a plan is evaluated.
    This is the "bag" that flows through the calculators.
    """

    plan: PayPlan
    inputs: DealInputs

    # Step results (populated as we go)
    pack_deduction: Decimal = ZERO
    front_end: FrontEndCalculation = field(default_factory=FrontEndCalculation)
    back_end: BackEndCalculation = field(default_factory=BackEndCalculation)
    minimum_guarantee: Decimal = ZERO


@dataclass(frozen=True)
class PayoutResult:
    """Final payout breakdown for one evaluation."""

    front_end_commission: Decimal
    back_end_commission: Decimal
    csi_bonus: Decimal
    pack_deduction: Decimal
    unit_flat_amount: Decimal
    percentage_amount: Decimal
    used_higher_amount: bool
    total_commission: Decimal
    minimum_guarantee: Decimal
    final_payout: Decimal
    adjusted_front_end_profit: Decimal = ZERO
    back_end_percentage: Decimal = ZERO

    @property
    def guarantee_applied(self) -> bool:
        return self.minimum_guarantee > self.total_commission
