"""Configuration loader for the gateway."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from common.config import ConfigSingleton, build_section, find_config_path, load_yaml

load_dotenv()

CONFIG_DIR = Path(__file__).resolve().parent / "configs"


@dataclass
class FeedConfig:
    feed_url: str = "https://skids.clinic/blog/feed/"
    page_param: str = "paged"
    max_pages: int = 20
    site_url: str = "https://skids.clinic"
    path_prefix: str = "/blog/"


@dataclass
class CacheConfig:
    catalog_ttl_seconds: int = 15 * 60
    image_ttl_seconds: int = 20 * 60
    article_ttl_seconds: int = 20 * 60


@dataclass
class ProviderConfig:
    order: list[str] = field(default_factory=lambda: ["gemini", "groq"])
    gemini_model: str = "gemini-2.0-flash"
    groq_model: str = "llama-3.1-8b-instant"
    temperature: float = 0.2
    timeout_seconds: float = 30.0
    max_input_chars: int = 2000


@dataclass
class IdentityConfig:
    lookup_url: str = "https://identitytoolkit.googleapis.com/v1/accounts:lookup"


@dataclass
class HttpConfig:
    timeout_seconds: float = 15.0


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8787


@dataclass
class Secrets:
    gemini_api_key: str | None = None
    groq_api_key: str | None = None
    firebase_web_api_key: str | None = None

    @classmethod
    def from_env(cls) -> "Secrets":
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            groq_api_key=os.getenv("GROQ_API_KEY") or None,
            firebase_web_api_key=os.getenv("FIREBASE_WEB_API_KEY") or None,
        )


@dataclass
class GatewayConfig:
    service_name: str = "pairents"
    default_blog_limit: int = 60
    feed: FeedConfig = field(default_factory=FeedConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    providers: ProviderConfig = field(default_factory=ProviderConfig)
    identity: IdentityConfig = field(default_factory=IdentityConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    secrets: Secrets = field(default_factory=Secrets)


def parse_config(raw: dict) -> GatewayConfig:
    return GatewayConfig(
        service_name=raw.get("service_name", "pairents"),
        default_blog_limit=raw.get("default_blog_limit", 60),
        feed=build_section(FeedConfig, raw.get("feed")),
        cache=build_section(CacheConfig, raw.get("cache")),
        providers=build_section(ProviderConfig, raw.get("providers")),
        identity=build_section(IdentityConfig, raw.get("identity")),
        http=build_section(HttpConfig, raw.get("http")),
        server=build_section(ServerConfig, raw.get("server")),
        secrets=Secrets.from_env(),
    )


def load_config(config_name: str | None = None) -> GatewayConfig:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses GATEWAY_CONFIG env var or "prod".
    """
    path = find_config_path(config_name, CONFIG_DIR, default_name="prod", env_var="GATEWAY_CONFIG")
    return parse_config(load_yaml(path))


_manager: ConfigSingleton[GatewayConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
