import os
from typing import Literal

from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    # LLM scoring
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    llm_temperature: float = 0.1
    llm_max_output_tokens: int = 2000
    llm_thinking_budget: int = 0

    # Text extraction
    extraction_api_url: str = "https://api.pdf.co/v1/pdf/convert/to/text"
    extraction_api_key: str = ""
    extraction_timeout_seconds: float = 30.0
    extraction_chain: str = "external,pattern,heuristic"
    max_text_length: int = 5000

    # Batch pacing (seconds between model calls)
    inter_call_delay_seconds: float = 1.0

    # Document storage
    storage_backend: Literal["local", "supabase"] = "local"
    profiles_dir: str = "profiles"
    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_bucket: str = "candidate_profiles"
    storage_list_limit: int = 10
    empty_store_policy: Literal["error", "sample"] = "error"

    # Uploads
    max_upload_size_mb: int = 10
    max_upload_files: int = 10

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8080",
    ]
    log_level: str = "INFO"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def extraction_chain_list(self) -> list[str]:
        """Ordered strategy names from the comma-separated chain."""
        return [s.strip().lower() for s in self.extraction_chain.split(",") if s.strip()]


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
