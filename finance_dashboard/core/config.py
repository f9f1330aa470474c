from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App settings
    PROJECT_NAME: str = "FinanceDashboard"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = "INFO"

    # DynamoDB
    DYNAMO_REGION: str = "eu-west-1"
    DYNAMO_ENDPOINT_URL: Optional[str] = None  # e.g. http://localhost:8001 for DynamoDB Local
    DYNAMO_TRANSACTIONS_TABLE: str = "finance-dashboard-transactions"
    DYNAMO_BUDGETS_TABLE: str = "finance-dashboard-budgets"
    DYNAMO_MAX_ATTEMPTS: int = 5

    # Display
    CURRENCY_SYMBOL: str = "₹"
    RECENT_TRANSACTIONS_LIMIT: int = 5

    # Insight heuristics
    INSIGHT_INCREASE_PERCENT: float = 20.0
    INSIGHT_DECREASE_PERCENT: float = -10.0
    INSIGHT_BUDGET_ALERT_PERCENT: float = 90.0
    INSIGHT_SPIKE_PERCENT: float = 50.0
    INSIGHT_SPIKE_MIN_AMOUNT: float = 100.0
    INSIGHT_MAX_COUNT: int = 5

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
