import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    leetcode_base_url: str
    user_agent: str
    timeout: float
    page_size: int
    max_pages: int
    host: str
    port: int
    log_level: str


_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _log_level(value: str) -> str:
    level = value.strip().upper()
    return level if level in _LOG_LEVELS else "INFO"


_def_ua = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


settings = Settings(
    leetcode_base_url=os.getenv("LEETCODE_BASE_URL", "https://leetcode.com").strip().rstrip("/"),
    user_agent=os.getenv("LEETCODE_USER_AGENT", "").strip() or _def_ua,
    timeout=float(os.getenv("LEETCODE_TIMEOUT", "15")),
    page_size=int(os.getenv("HISTORY_PAGE_SIZE", "20")),
    max_pages=int(os.getenv("HISTORY_MAX_PAGES", "500")),
    host=os.getenv("HOST", "0.0.0.0").strip(),
    port=int(os.getenv("PORT", "8000")),
    log_level=_log_level(os.getenv("LOG_LEVEL", "INFO")),
)
