from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    layout_engine: str = "pdfplumber"

    template_source: str = "filesystem"
    template_root: str = "/app/templates"
    template_base_url: str = ""
    template_fetch_timeout_seconds: float = 10.0

    notification_template_dir: str = "notificação"
    collection_template_dirs: list[str] = ["notificação", "notificacao"]
    collection_template_prefix: str = "NOTIFICAÇÃO DE BOLETOS EM ATRASO - "

    company_placeholder: str = "L R PEREIRA JUNIOR LTDA"
    keep_company_above_tax_id: bool = True
    letter_city: str = "Toledo"
    letter_timezone: str = "America/Sao_Paulo"

    output_dir: str = "/app/output"
