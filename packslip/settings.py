from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="PACKSLIP_", extra="ignore")

    merchant_name: str = ""
    merchant_mobile: str = ""

    upi_id: str = ""
    upi_payee_name: str = ""

    storage_backend: str = "local"
    storage_local_path: str = "./slips"
    storage_prefix: str = ""

    counter_path: str = "./slips/counter.json"

    share_message: str = "Please find your slip attached."

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
