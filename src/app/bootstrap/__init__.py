"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
mantém as instâncias únicas do processo (stores, cache, clientes, use
case), criadas sob demanda.

Uso:
    from app.bootstrap import initialize_app, get_process_webhook_use_case

    # Na inicialização do serviço
    initialize_app()

    use_case = get_process_webhook_use_case()
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from app.observability import get_delivery_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_dedupe_settings,
    get_neynar_settings,
    get_telegram_settings,
)

# Nome do serviço para logs e métricas
SERVICE_NAME = "farcaster_notifier"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Inicializa logging JSON com delivery_id.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        delivery_id_getter=get_delivery_id,
    )


def collect_settings_errors() -> list[str]:
    """Erros de validação de todas as settings, prefixados por domínio."""
    errors: list[str] = []
    errors.extend(f"base: {error}" for error in get_base_settings().validate())
    errors.extend(f"dedupe: {error}" for error in get_dedupe_settings().validate())
    errors.extend(f"neynar: {error}" for error in get_neynar_settings().validate())
    errors.extend(f"telegram: {error}" for error in get_telegram_settings().validate())
    return errors


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    errors = collect_settings_errors()

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if base.fails_fast:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Singletons do processo (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_idempotency_store():
    """Janela de dedupe do processo (singleton)."""
    from app.bootstrap.dependencies import create_idempotency_store

    return create_idempotency_store()


@lru_cache(maxsize=1)
def get_snapshot_store():
    """Últimos snapshots de perfil conhecidos (singleton)."""
    from app.bootstrap.dependencies import create_snapshot_store

    return create_snapshot_store()


@lru_cache(maxsize=1)
def get_profile_cache():
    """Cache de perfis com lookup Neynar (singleton)."""
    from app.bootstrap.dependencies import create_profile_cache

    return create_profile_cache()


@lru_cache(maxsize=1)
def get_dispatcher():
    """Dispatcher de notificações Telegram (singleton)."""
    from app.bootstrap.dependencies import create_dispatcher

    return create_dispatcher()


@lru_cache(maxsize=1)
def get_process_webhook_use_case():
    """Use case do webhook ligado aos singletons acima."""
    from app.bootstrap.dependencies import create_process_webhook_use_case

    return create_process_webhook_use_case(
        idempotency=get_idempotency_store(),
        profile_cache=get_profile_cache(),
        snapshot_store=get_snapshot_store(),
        dispatcher=get_dispatcher(),
    )


def reset_singletons() -> None:
    """Descarta as instâncias cacheadas (settings e stores). Uso em testes."""
    for getter in (
        get_idempotency_store,
        get_snapshot_store,
        get_profile_cache,
        get_dispatcher,
        get_process_webhook_use_case,
        get_base_settings,
        get_dedupe_settings,
        get_neynar_settings,
        get_telegram_settings,
    ):
        getter.cache_clear()
