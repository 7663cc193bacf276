from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pymupdf"
    min_text_length: int = 50
    line_tolerance: float = 5.0
    word_gap: float = 10.0

    ocr_language: str = "eng"
    tesseract_cmd: str = ""
    ocr_max_pages: int = 10
    ocr_render_scale: float = 2.0
    ocr_min_confident_chars: int = 20
