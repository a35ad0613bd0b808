from pydantic_settings import BaseSettings, SettingsConfigDict

# 未設定 JWT_SECRET 時的後備值（已知安全缺口，部署時務必覆寫）
DEFAULT_JWT_SECRET = "prephub-secret-key-2024"


class Settings(BaseSettings):
    # --- DB 設定 ---
    DATABASE_PATH: str = "data/database.sqlite"

    # --- JWT 設定 ---
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # --- 預設管理者 ---
    ADMIN_NAME: str = "Admin"
    ADMIN_EMAIL: str = "admin@prephub.com"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_AVATAR: str = "👑"

    # --- 其他應用設定 ---
    CORS_ORIGINS: list[str] = ["*"]
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.DATABASE_PATH}"

    @property
    def uses_default_secret(self) -> bool:
        return self.JWT_SECRET == DEFAULT_JWT_SECRET


settings = Settings()
