"""Typed settings for the rendering core, loaded from BIZDOC_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BIZDOC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Document store (read-only)
    document_store_dir: str = "data/documents"

    # PDF engine timeouts (seconds, per suspension point)
    browser_launch_timeout_s: float = 15.0
    content_load_timeout_s: float = 20.0
    font_ready_timeout_s: float = 10.0
    print_timeout_s: float = 20.0
    font_settle_delay_s: float = 0.5

    browser_args: list[str] = [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-accelerated-2d-canvas",
        "--no-first-run",
        "--no-zygote",
        "--disable-gpu",
        "--font-render-hinting=none",
        "--enable-font-antialiasing",
        "--force-device-scale-factor=1",
    ]

    # Fallback chain order; first entry is the preferred face.
    pdf_font_families: list[str] = [
        "Noto Sans KR",
        "NotoSansKR-Regular",
        "맑은 고딕",
        "Malgun Gothic",
        "나눔고딕",
        "NanumGothic",
    ]

    # Slides
    slide_layout: str = "4:3"
    slide_font_face: str = "Malgun Gothic"
    tier_medium_threshold: int = 300
    tier_small_threshold: int = 500
    tier_large_pt: int = 16
    tier_medium_pt: int = 14
    tier_small_pt: int = 12
    body_line_spacing_pt: int = 24

    # Company branding
    company_name: str = "주식회사 해피솔라"
    company_business_number: str = "578-87-02666"
    company_address: str = "전라남도 장흥군 장흥읍 장흥로 30, 2층"
    company_business_type: str = "건설업, 전기공사업, 태양광발전소 부대장비"
    company_representative: str = "김미희"
    company_brand_mark: str = "해피솔라"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
