from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from the process + optionally from a local .env file
    model_config = SettingsConfigDict(
        env_file=(".env",),
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_invoice", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    # Issuer identity (printed on every invoice)
    COMPANY_NAME: str = Field(default="DESHKAR ADVERTISING", validation_alias=AliasChoices("COMPANY_NAME", "company_name"))
    COMPANY_ADDRESS: str = Field(
        default="R15, SP Tower 1st Floor, Anupam Nagar, Nr. Flyover",
        validation_alias=AliasChoices("COMPANY_ADDRESS", "company_address"),
    )
    COMPANY_CITY: str = Field(default="Raipur", validation_alias=AliasChoices("COMPANY_CITY", "company_city"))
    COMPANY_PINCODE: str = Field(default="492007", validation_alias=AliasChoices("COMPANY_PINCODE", "company_pincode"))
    COMPANY_GSTIN: str = Field(default="22AKJPD0941N4Z8", validation_alias=AliasChoices("COMPANY_GSTIN", "company_gstin"))
    COMPANY_PAN: str = Field(default="AKJPD0941N", validation_alias=AliasChoices("COMPANY_PAN", "company_pan"))
    COMPANY_PHONE: str = Field(default="+91 771 2538818", validation_alias=AliasChoices("COMPANY_PHONE", "company_phone"))
    COMPANY_EMAIL: str = Field(default="deshkaradvertising@gmail.com", validation_alias=AliasChoices("COMPANY_EMAIL", "company_email"))
    COMPANY_WEBSITE: str = Field(default="www.deshkaradvertising.com", validation_alias=AliasChoices("COMPANY_WEBSITE", "company_website"))

    # Intrastate vs interstate is decided against this state name
    HOME_STATE: str = Field(default="Chhattisgarh", validation_alias=AliasChoices("HOME_STATE", "home_state"))

    # Form defaults
    DEFAULT_GST_RATE: float = Field(default=18, validation_alias=AliasChoices("DEFAULT_GST_RATE", "default_gst_rate"))
    DEFAULT_HSN: str = Field(default="998366", validation_alias=AliasChoices("DEFAULT_HSN", "default_hsn"))
    DEFAULT_DURATION: str = Field(default="37", validation_alias=AliasChoices("DEFAULT_DURATION", "default_duration"))

    # PDF layout
    FIRST_PAGE_ROW_BUDGET: int = Field(default=13, validation_alias=AliasChoices("FIRST_PAGE_ROW_BUDGET", "first_page_row_budget"))
    HEADER_IMAGE_PATH: str = Field(
        default="static/header-image.jpg",
        validation_alias=AliasChoices("HEADER_IMAGE_PATH", "header_image_path"),
    )
    FOOTER_IMAGE_PATH: str = Field(
        default="static/footer-image.jpg",
        validation_alias=AliasChoices("FOOTER_IMAGE_PATH", "footer_image_path"),
    )


settings = Settings()
