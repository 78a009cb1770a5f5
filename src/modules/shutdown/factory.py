"""Factory for creating ShutdownCoordinator instances."""

from typing import Dict, Iterable, Optional

from .closable import Closable
from .config import ShutdownConfig
from .coordinator import ShutdownCoordinator
from .triggers import TriggerSource


class ShutdownCoordinatorFactory:
    """Factory for creating and managing ShutdownCoordinator instances."""
    
    _instance = None
    _coordinators: Dict[str, ShutdownCoordinator] = {}
    
    @classmethod
    def get_instance(cls) -> 'ShutdownCoordinatorFactory':
        """Get or create the singleton factory instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance
    
    def create_coordinator(
        self,
        name: str = "default",
        services: Iterable[Closable] = (),
        config: Optional[ShutdownConfig] = None,
        trigger_source: Optional[TriggerSource] = None
    ) -> ShutdownCoordinator:
        """
        Create a new ShutdownCoordinator instance or return an existing one.
        
        Args:
            name: Optional name for the coordinator instance
            services: Initial services, only used when the coordinator is created
            config: Coordinator configuration, only used when the coordinator is created
            trigger_source: Trigger source, only used when the coordinator is created
            
        Returns:
            A ShutdownCoordinator instance
        """
        if name not in self._coordinators:
            self._coordinators[name] = ShutdownCoordinator(
                services=services,
                config=config,
                trigger_source=trigger_source
            )
        
        return self._coordinators[name]
    
    def get_coordinator(self, name: str = "default") -> Optional[ShutdownCoordinator]:
        """
        Get an existing coordinator by name.
        
        Args:
            name: Name of the coordinator to retrieve
            
        Returns:
            The coordinator instance or None if not found
        """
        return self._coordinators.get(name)

    def reset(self) -> None:
        """Forget all coordinators and detach them from their trigger sources."""
        for coordinator in self._coordinators.values():
            coordinator.trigger_source.unsubscribe()
        self._coordinators.clear()
