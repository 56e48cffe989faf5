from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # AMM: fee withheld from the input side, in basis points
    AMM_FEE_BPS: int = 50

    # Ladder: taker fee deflates the input budget before the walk
    LADDER_TAKER_FEE_BPS: float = 5.0
    # False keeps levels depleted by a walk that ran out of liquidity;
    # True restores the pre-quote snapshot instead
    LADDER_ATOMIC_FILLS: bool = False

    # App
    APP_NAME: str = "Swap Quote Engine"


settings = Settings()
