# config.py
import os
from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
load_dotenv(dotenv_path=os.path.join(BASE_DIR, '.env'))

DEFAULT_PROVIDER_ORDER = "openai,anthropic,gemini,deepseek,grok,groq,local"


def _flag(value) -> bool:
    return str(value or "").strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Runtime configuration read from the environment (or any mapping)."""

    def __init__(self, env=None):
        env = os.environ if env is None else env
        get = lambda key, default=None: (env.get(key) or default)

        # credentials
        self.openai_api_key = get("OPENAI_API_KEY")
        self.anthropic_api_key = get("ANTHROPIC_API_KEY")
        self.gemini_api_key = get("GEMINI_API_KEY")
        self.deepseek_api_key = get("DEEPSEEK_API_KEY")
        self.grok_api_key = get("GROK_API_KEY")
        self.groq_api_key = get("GROQ_API_KEY")

        # models / endpoints
        self.openai_base_url = get("OPENAI_BASE_URL")
        self.openai_model = get("OPENAI_MODEL", "gpt-4-turbo-preview")
        self.anthropic_model = get("ANTHROPIC_MODEL", "claude-3-sonnet-20240229")
        self.gemini_model = get("GEMINI_MODEL", "gemini-1.5-flash")
        self.deepseek_model = get("DEEPSEEK_MODEL", "deepseek-chat")
        self.grok_base_url = get("GROK_BASE_URL", "https://api.x.ai/v1")
        self.grok_model = get("GROK_MODEL", "grok-2-latest")
        self.groq_model = get("GROQ_MODEL", "llama-3.3-70b-versatile")
        self.groq_fallback_model = get("GROQ_FALLBACK_MODEL", "llama-3.1-8b-instant")

        self.enable_local_stub = _flag(get("ENABLE_LOCAL_STUB"))
        order = get("PROVIDER_ORDER", DEFAULT_PROVIDER_ORDER)
        self.provider_order = [p.strip().lower() for p in order.split(",") if p.strip()]

        self.max_content_chars = int(get("MAX_CONTENT_CHARS", 20000))
        self.request_timeout = float(get("REQUEST_TIMEOUT", 120))

        # runtime / storage
        self.runtime_dir = get("RUNTIME_DIR", os.path.join(BASE_DIR, "runtime"))
        self.uploads_dir = get("UPLOADS_DIR", os.path.join(self.runtime_dir, "uploads"))
        self.database_url = get(
            "DATABASE_URL", "sqlite:///" + os.path.join(self.runtime_dir, "quizzes.db")
        )
        self.max_upload_mb = int(get("MAX_UPLOAD_MB", 20))
        self.secret_key = get("SECRET_KEY", "dev")
        self.log_level = get("LOG_LEVEL", "INFO").upper()

    def __repr__(self):
        return f"<Settings providers={self.provider_order} db={self.database_url}>"
