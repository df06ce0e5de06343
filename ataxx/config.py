from dotenv import load_dotenv
import os
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ataxx.ai.constants import DEFAULT_MINIMAX_DEPTH


class Settings(BaseModel):
    search_depth: int = Field(DEFAULT_MINIMAX_DEPTH, ge=0)
    seed: Optional[int] = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    cors_origins: List[str] = ["*"]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    cors_origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        search_depth=os.getenv("ATAXX_SEARCH_DEPTH", DEFAULT_MINIMAX_DEPTH),
        seed=os.getenv("ATAXX_SEED") or None,
        log_level=os.getenv("ATAXX_LOG_LEVEL", "INFO").upper(),
        cors_origins=[o.strip() for o in cors_origins.split(",") if o.strip()],
    )
