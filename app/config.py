from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    app_name: str = "Student Roster Console"
    debug: bool = False
    
    # Students API settings
    students_api_base: str = "http://localhost:8080/api/v1"
    request_timeout: Optional[float] = None
    
    # Console settings
    message_timeout: float = 5.0
    
    # Application settings
    log_dir: str = "logs"
    log_level: str = "info"
    
    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
