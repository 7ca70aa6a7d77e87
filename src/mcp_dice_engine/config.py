from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DICE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = "mcp-dice-engine"
    log_level: str = "INFO"

    # Cap on dice summed across a whole expression; 0 disables it.
    # Each single count or side value is capped at 10000 regardless.
    max_total_dice: int = 10_000

    @property
    def total_dice_cap(self) -> int | None:
        return self.max_total_dice if self.max_total_dice > 0 else None


settings = Settings()
