from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "DEAL_"}

    # App
    log_level: str = "INFO"

    # Projection
    projection_years: int = 5

    # Warning thresholds (all percent values are whole-number percents)
    dscr_danger: Decimal = Decimal("1.0")
    dscr_caution: Decimal = Decimal("1.25")
    min_vacancy_percent: Decimal = Decimal("5")
    low_coc_percent: Decimal = Decimal("4")
    min_reserves_percent: Decimal = Decimal("1")  # maintenance + capex, of value
    low_cap_rate_percent: Decimal = Decimal("4")
    high_expense_ratio_percent: Decimal = Decimal("50")
    # Half of the 1% rule: rent under 0.5% of price per month
    min_rent_to_price_percent: Decimal = Decimal("0.5")
    min_cash_flow_per_door: Decimal = Decimal("200")


settings = Settings()
