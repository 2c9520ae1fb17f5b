# Copyright (c) 2025 Alexandre Tavares
# Licensed under the Creative Commons Attribution-NonCommercial 4.0 International (CC BY-NC 4.0)
# See the LICENSE file in the project root for more information.
import os
from dataclasses import dataclass
from dotenv import load_dotenv

"""
Central de configurações (Settings) do weatherdash.


- Carrega variáveis do .env (app/env/log/cors/provedores/armazenamento).
- Fornece defaults seguros e tipados via dataclass.
- Expõe `settings` para uso em toda a app (clients recebem valores explícitos).
"""

load_dotenv()

@dataclass
class Settings:
    APP_NAME: str = os.getenv("APP_NAME", "weatherdash")
    APP_ENV: str = os.getenv("APP_ENV", "local")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./weatherdash.db")

    CORS_ORIGINS: list[str] = tuple(
        origin.strip() for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin.strip()
    )

    # "weatherapi" (comercial) ou "weather-gov" (NWS)
    WEATHER_PROVIDER: str = os.getenv("WEATHER_PROVIDER", "weatherapi")

    WEATHER_API_KEY: str = os.getenv("WEATHER_API_KEY", "")
    WEATHER_API_BASE_URL: str = os.getenv("WEATHER_API_BASE_URL", "https://api.weatherapi.com/v1")
    WEATHER_API_TIMEOUT_S: int = int(os.getenv("WEATHER_API_TIMEOUT_S", "10"))

    WEATHER_GOV_BASE_URL: str = os.getenv("WEATHER_GOV_BASE_URL", "https://api.weather.gov")
    WEATHER_GOV_PROXY_URL: str = os.getenv("WEATHER_GOV_PROXY_URL", "")
    WEATHER_GOV_USER_AGENT: str = os.getenv("WEATHER_GOV_USER_AGENT", "weatherdash/1.0")
    WEATHER_GOV_TIMEOUT_S: int = int(os.getenv("WEATHER_GOV_TIMEOUT_S", "15"))

    PROXY_TIMEOUT_S: int = int(os.getenv("PROXY_TIMEOUT_S", "15"))

    GEOCODER_URL: str = os.getenv("GEOCODER_URL", "https://geocoding-api.open-meteo.com/v1/search")
    GEOCODER_RESULTS: int = int(os.getenv("GEOCODER_RESULTS", "5"))

    FORECAST_DAYS: int = int(os.getenv("FORECAST_DAYS", "5"))

settings = Settings()
