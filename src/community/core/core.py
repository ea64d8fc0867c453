from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from community.config import Config
from community.core.db import Mongo
from community.core.modules.session.sweeper import SessionSweeper

logger = structlog.get_logger(__name__)


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from community.core.modules.access.service import AccessService  # noqa: PLC0415
    from community.core.modules.session.service import SessionService  # noqa: PLC0415
    from community.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    session: SessionService
    access: AccessService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("user", "community.core.modules.user.service", "UserService"),
            ("session", "community.core.modules.session.service", "SessionService"),
            ("access", "community.core.modules.access.service", "AccessService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database handle, services and the session sweeper."""

    config: Config
    mongo: Mongo
    services: Services
    sweeper: SessionSweeper

    def __init__(self, config: Config, mongo: Mongo | None = None) -> None:
        """Initialize core with config and MongoDB handle, auto-register services."""
        self.config = config
        self.mongo = mongo if mongo is not None else Mongo(config)
        self.services = Services(self.mongo.database)
        self.services.set_core(self)
        self.sweeper = SessionSweeper(self.sweep_expired_sessions)
        self._services_started = False

    @property
    def services_started(self) -> bool:
        return self._services_started

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def ensure_services_started(self) -> bool:
        """Start services once the database answers, return whether they are started.

        Service startup creates indexes, so it is retried after a startup outage
        by the first request or sweep that finds the database reachable.
        """
        if self._services_started:
            return True
        if not await self.mongo.ping():
            return False
        await self.services.start_all()
        self._services_started = True
        logger.info("services_started")
        return True

    async def sweep_expired_sessions(self) -> int:
        await self.ensure_services_started()
        return await self.services.session.cleanup_expired_sessions()

    async def on_start(self) -> None:
        """Start services and the sweeper.

        Without a reachable database the process still starts; requests are
        answered with 503 until it comes back.
        """
        if not await self.ensure_services_started():
            logger.warning("database_unavailable_at_startup")
        self.sweeper.start()

    async def on_stop(self) -> None:
        """Stop the sweeper and services, close MongoDB connection."""
        await self.sweeper.stop()
        await self.services.stop_all()
        await self.mongo.close()
