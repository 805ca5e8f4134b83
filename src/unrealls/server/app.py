"""Session factory: wires engine resolution, knowledge, index and actions."""

from __future__ import annotations

from pathlib import Path

import structlog

from unrealls.actions.provider import EngineActions
from unrealls.completion.resolver import CompletionResolver
from unrealls.config.models import UnrealLSConfig
from unrealls.engine.locator import EngineLocator
from unrealls.index.headers import HeaderIndex
from unrealls.knowledge.base import KnowledgeBase
from unrealls.server.session import Session

logger = structlog.get_logger()


def create_session(
    project_path: Path,
    config: UnrealLSConfig,
    *,
    engine_path: str | None = None,
    locator: EngineLocator | None = None,
) -> Session:
    """Create the protocol session for *project_path*.

    An explicit *engine_path* replaces the install path of the resolved version.
    The header scan starts here, in the background, when indexing is enabled.
    """
    locator = locator or EngineLocator(config.engine)
    version = locator.resolve_for_project(project_path)
    if engine_path:
        version = version.with_install_path(engine_path)

    knowledge = KnowledgeBase()

    index: HeaderIndex | None = None
    if config.index.enabled:
        index = HeaderIndex(
            version.install_path,
            knowledge.get_include_paths(version),
            suffixes=config.index.header_suffixes,
        )
    else:
        logger.info("header_scan_disabled")

    resolver = CompletionResolver(version, knowledge, index)
    actions = EngineActions(project_path, version)
    logger.info(
        "session_created",
        project=str(project_path),
        version=str(version),
        install_path=version.install_path,
    )
    return Session(resolver, actions, config.server)
