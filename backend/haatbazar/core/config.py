# backend/haatbazar/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path
import os

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "HaatBazar Storefront"
    PROJECT_VERSION: str = "0.1.0"

    # Backend REST externo (productos, pedidos, cuentas)
    BACKEND_API_URL: str = os.getenv("BACKEND_API_URL", "http://localhost:5001/api")
    BACKEND_TIMEOUT: float = 10.0
    BACKEND_API_TOKEN: Optional[str] = None

    # Configuración de Redis (snapshot del carrito y sesión del navegador)
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", 6379))
    REDIS_DB: int = 0

    # "redis" en producción, "memory" para desarrollo local sin Redis
    CART_STORAGE: str = "redis"
    # Navegadores que conserva el almacenamiento "memory" antes de expulsar los más antiguos
    MEMORY_STORE_MAX_BROWSERS: int = 1000

    # Cookie que identifica al navegador; el carrito va por navegador, no por cuenta
    BROWSER_COOKIE_NAME: str = "haatbazar_browser"
    BROWSER_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 30

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def REDIS_URL(self) -> str:
        """URL de conexión a Redis."""
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
