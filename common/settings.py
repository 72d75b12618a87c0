import os
from pydantic import BaseModel, field_validator, ValidationError

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"


class RPC(BaseModel):
    url: str = DEFAULT_RPC_URL
    timeout: float = 20.0
    commitment: str = "confirmed"

    @field_validator("url")
    @classmethod
    def must_be_http(cls, v: str) -> str:
        # unresolved placeholder falls back to the public cluster
        if "${" in v:
            return DEFAULT_RPC_URL
        v = v.strip()
        if not v.startswith(("https://", "http://")):
            raise ValueError("RPC URL must be http(s)")
        return v


class Holders(BaseModel):
    default_limit: int = 10
    min_limit: int = 2
    max_limit: int = 10
    max_accounts: int = 30
    eager_program_lookup: bool = True


class Server(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080


class Settings(BaseModel):
    network: str = "solana-mainnet"
    rpc: RPC = RPC()
    holders: Holders = Holders()
    server: Server = Server()


def load_settings(path: str = "config.yaml") -> Settings:
    import yaml
    cfg = {}
    if os.path.exists(path):
        with open(path, "r") as f:
            cfg = yaml.safe_load(f) or {}

    # allow override via env at runtime
    env_rpc = os.environ.get("SOLANA_RPC_URL")
    if env_rpc:
        cfg.setdefault("rpc", {})
        cfg["rpc"]["url"] = env_rpc

    try:
        return Settings.model_validate(cfg)
    except ValidationError as e:
        raise RuntimeError(f"Configuration error in {path}: {e}") from e


_settings = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings(os.environ.get("HOLDERS_CONFIG", "config.yaml"))
    return _settings
