from .config import (
    DEFAULTS,
    CompanySettings,
    DeductionRates,
    get_bpjs_cap,
    get_bpjs_rate,
    get_deduction_rates,
    get_settings,
    get_value,
)

__all__ = [
    "DEFAULTS",
    "CompanySettings",
    "DeductionRates",
    "get_settings",
    "get_value",
    "get_bpjs_rate",
    "get_bpjs_cap",
    "get_deduction_rates",
]
