from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


@dataclass(frozen=True)
class ConnectionParams:
    host: str
    port: int
    user: str
    password: str


# Fixed connection used in CI instead of reading env/.env
CI_CONNECTION = ConnectionParams(host="localhost", port=27017, user="admin", password="pass")

AUTH_TABLE = "auth"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database
    DB_SCHEME: str = "postgresql+psycopg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 27017
    DB_USER: str = "admin"
    DB_PASSWORD: str = ""
    DB_NAME: str = "redirector"
    DATABASE_URL: str | None = None  # overrides the parts above when set

    CI: bool = False
    DEBUG: bool = False

    # Bootstrap
    CONNECT_RETRIES: int = 3
    COLLECTION_RETRIES: int = 3
    RETRY_DELAY_SECONDS: float = 0.0
    DEFAULT_ADMIN_NAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "pass"

    # Redirects
    FALLBACK_URL: str = "https://lmpk.tk"
    REDIRECT_PREFIX: str = "/r"

    LOG_LEVEL: str = "INFO"

    def connection_params(self) -> ConnectionParams:
        if self.CI:
            return CI_CONNECTION
        return ConnectionParams(
            host=self.DB_HOST,
            port=self.DB_PORT,
            user=self.DB_USER,
            password=self.DB_PASSWORD,
        )

    def connection_url(self) -> str | URL:
        if self.DATABASE_URL and not self.CI:
            return self.DATABASE_URL
        params = self.connection_params()
        # URL.create quotes reserved characters in user/password
        return URL.create(
            self.DB_SCHEME,
            username=params.user,
            password=params.password,
            host=params.host,
            port=params.port,
            database=self.DB_NAME,
        )

    @property
    def mappings_table(self) -> str:
        return "mappings_dev" if self.DEBUG else "mappings"


settings = Settings()
