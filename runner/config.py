import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "https://api.domain.com.au/v1/listings/residential/_search"


@dataclass(frozen=True)
class Config:
    api_key: str
    listen_addr: str = ":10550"
    api_url: str = DEFAULT_API_URL
    criteria_dir: str = "./criteria"
    result_cap: int = 1000
    page_timeout: float = 30.0
    search_deadline: float = 120.0
    log_level: str = "INFO"


def load_config(**overrides) -> Config:
    """Build a Config from the environment; non-None overrides win."""
    values = dict(
        api_key=os.getenv("DOMAIN_API_KEY", ""),
        listen_addr=os.getenv("LISTEN_ADDR", ":10550"),
        api_url=os.getenv("DOMAIN_API_URL", DEFAULT_API_URL),
        criteria_dir=os.getenv("CRITERIA_DIR", "./criteria"),
        result_cap=int(os.getenv("RESULT_CAP", "1000")),
        page_timeout=float(os.getenv("PAGE_TIMEOUT_SECONDS", "30")),
        search_deadline=float(os.getenv("SEARCH_DEADLINE_SECONDS", "120")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
    values.update({k: v for k, v in overrides.items() if v is not None})

    if not values["api_key"]:
        raise RuntimeError("DOMAIN_API_KEY not found in .env (or pass --api-key)")
    return Config(**values)
