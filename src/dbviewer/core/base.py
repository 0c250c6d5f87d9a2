"""Base classes for dbviewer components.

This module provides the lifecycle base classes the database adapters are
built on: a configured component with health reporting and an async
component with ``initialize``/``cleanup`` hooks.

Classes:
    BaseComponent: Generic base class for configured components
    AsyncComponent: Base class for components owning async resources

Example:
    >>> class PostgreSQLAdapter(AsyncComponent[ConnectionConfig]):
    ...     async def _async_initialize(self) -> None:
    ...         self._pool = await asyncpg.create_pool(...)
"""

import time
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, ClassVar, Dict, Generic, TypeVar

import structlog

from .exceptions import DBViewerException, ErrorCodes, ValidationError

logger = structlog.get_logger(__name__)

# Configuration type
T = TypeVar("T")


class BaseComponent(Generic[T], ABC):
    """Base class for configured dbviewer components.

    Type Parameters:
        T: Type of configuration object this component accepts

    Attributes:
        component_name: Name of the component for logging and identification
        version: Component version
    """

    component_name: ClassVar[str] = "BaseComponent"
    version: ClassVar[str] = "1.0.0"

    def __init__(self, config: T) -> None:
        """Initialize base component.

        Args:
            config: Configuration object for this component

        Raises:
            ValidationError: If configuration is missing
        """
        if config is None:
            raise ValidationError(
                "Configuration cannot be None",
                code=ErrorCodes.CONFIG_INVALID,
                context={"component": self.component_name},
            )

        self._config: T = config
        self._initialized: bool = False
        self._creation_time: float = time.time()
        self._logger = structlog.get_logger(self.__class__.__name__)

    @property
    def config(self) -> T:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def uptime(self) -> float:
        """Seconds since the component was created."""
        return time.time() - self._creation_time

    def get_health_status(self) -> Dict[str, Any]:
        """Get component health status.

        Returns:
            Dictionary containing component health information
        """
        return {
            "component": self.component_name,
            "version": self.version,
            "initialized": self._initialized,
            "uptime_seconds": self.uptime,
            "status": "healthy" if self._initialized else "not_initialized",
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"name={self.component_name!r}, "
            f"initialized={self._initialized}, "
            f"uptime={self.uptime:.2f}s)"
        )


class AsyncComponent(BaseComponent[T]):
    """Base class for components owning async resources.

    Callers are expected to sequence lifecycle calls themselves; the
    component holds no lock around its state.
    """

    async def initialize(self) -> None:
        """Initialize component asynchronously.

        Raises:
            DBViewerException: If initialization fails (code ``INIT_FAILED``)
        """
        if self._initialized:
            return

        self._logger.debug("Initializing component", component=self.component_name)

        try:
            await self._async_initialize()
        except Exception as e:
            self._logger.error(
                "Component initialization failed",
                component=self.component_name,
                error=str(e),
            )
            raise DBViewerException(
                f"Failed to initialize {self.component_name}: {e}",
                code=ErrorCodes.INIT_FAILED,
                context={"component": self.component_name},
                cause=e,
            ) from e

        self._initialized = True
        self._logger.debug("Component initialized", component=self.component_name)

    async def cleanup(self) -> None:
        """Clean up component resources asynchronously.

        Never raises. The component is left uninitialized even when the
        cleanup hook fails.
        """
        if not self._initialized:
            return

        try:
            await self._async_cleanup()
        except Exception as e:
            self._logger.error(
                "Component cleanup failed",
                component=self.component_name,
                error=str(e),
            )
        finally:
            self._initialized = False

    @abstractmethod
    async def _async_initialize(self) -> None:
        """Perform async initialization work."""
        pass

    async def _async_cleanup(self) -> None:
        """Perform async cleanup work."""
        pass

    @asynccontextmanager
    async def managed_lifecycle(self) -> AsyncGenerator["AsyncComponent[T]", None]:
        """Context manager for automatic lifecycle management.

        Example:
            >>> async with adapter.managed_lifecycle() as active:
            ...     await active.get_tables()
        """
        try:
            await self.initialize()
            yield self
        finally:
            await self.cleanup()
