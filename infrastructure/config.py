"""Configuration and dependency wiring for the materials toolkit."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Literal, Mapping

from domain.interfaces import AccountDirectory, MaterialRepository
from infrastructure.repositories.sqlite_material_repository import SqliteMaterialRepository
from infrastructure.text_extraction.document_text_extractor import DocumentTextExtractor


BackendName = Literal["sqlite", "supabase"]

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class ConfigurationError(ValueError):
    """Raised when the environment does not describe a usable setup."""


def _clean(value: str | None) -> str | None:
    # Hosting dashboards happily store pasted values with a trailing newline.
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(slots=True)
class ContainerConfig:
    """Settings read once at start-up and passed to whatever needs them."""

    materials_backend: BackendName = "sqlite"
    db_path: str = "materials.db"
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None
    supabase_anon_key: str | None = None
    api_base_url: str = "http://localhost:3003/api"
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = "INFO"
    log_file: str | None = None

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ContainerConfig":
        env = os.environ if environ is None else environ
        defaults = cls()

        backend = (_clean(env.get("MATERIALS_BACKEND")) or defaults.materials_backend).lower()
        max_upload = _clean(env.get("MATERIALS_MAX_UPLOAD_BYTES"))
        try:
            max_upload_bytes = int(max_upload) if max_upload else defaults.max_upload_bytes
        except ValueError as exc:
            raise ConfigurationError(f"MATERIALS_MAX_UPLOAD_BYTES must be an integer, got {max_upload!r}") from exc

        return cls(
            materials_backend=backend,  # type: ignore[arg-type]
            db_path=_clean(env.get("MATERIALS_DB_PATH")) or defaults.db_path,
            supabase_url=_clean(env.get("SUPABASE_URL")),
            supabase_service_role_key=_clean(env.get("SUPABASE_SERVICE_ROLE_KEY")),
            supabase_anon_key=_clean(env.get("SUPABASE_ANON_KEY")),
            api_base_url=(_clean(env.get("MATERIALS_API_URL")) or defaults.api_base_url).rstrip("/"),
            max_upload_bytes=max_upload_bytes,
            log_level=(_clean(env.get("MATERIALS_LOG_LEVEL")) or defaults.log_level).upper(),
            log_file=_clean(env.get("MATERIALS_LOG_FILE")),
        )


@dataclass(slots=True)
class Container:
    """Concrete infrastructure bundled for the API and scripts."""

    config: ContainerConfig
    extractor: DocumentTextExtractor
    material_repository: MaterialRepository
    account_directory: AccountDirectory | None = None


def create_supabase_client(config: ContainerConfig):
    if not config.supabase_configured:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required")
    from supabase import create_client

    return create_client(config.supabase_url, config.supabase_service_role_key)


def _sqlite_repository(config: ContainerConfig, _client_factory: Callable[[], object]) -> MaterialRepository:
    return SqliteMaterialRepository(db_path=config.db_path)


def _supabase_repository(config: ContainerConfig, client_factory: Callable[[], object]) -> MaterialRepository:
    client = client_factory()
    from infrastructure.repositories.supabase_repositories import SupabaseMaterialRepository

    return SupabaseMaterialRepository(client)


_REPOSITORY_FACTORIES: dict[str, Callable[[ContainerConfig, Callable[[], object]], MaterialRepository]] = {
    "sqlite": _sqlite_repository,
    "supabase": _supabase_repository,
}


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or ContainerConfig.from_env()
    client = None

    def client_factory():
        nonlocal client
        if client is None:
            client = create_supabase_client(cfg)
        return client

    try:
        repository_factory = _REPOSITORY_FACTORIES[cfg.materials_backend]
    except KeyError as exc:
        raise ValueError(f"Unknown materials backend '{cfg.materials_backend}'") from exc
    material_repository = repository_factory(cfg, client_factory)

    account_directory = None
    if cfg.supabase_configured:
        from infrastructure.repositories.supabase_repositories import SupabaseAccountDirectory

        account_directory = SupabaseAccountDirectory(client_factory())

    return Container(
        config=cfg,
        extractor=DocumentTextExtractor(),
        material_repository=material_repository,
        account_directory=account_directory,
    )


__all__ = [
    "ConfigurationError",
    "Container",
    "ContainerConfig",
    "build_default_container",
    "create_supabase_client",
]
