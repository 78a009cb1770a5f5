"""Decorator registering methods of every new instance as shutdown services."""

import asyncio
import functools
import inspect
from typing import Any, Callable, Optional, Set

from .coordinator import ShutdownCoordinator
from .errors import ShutdownInProgressError, ShutdownTimeoutError
from .factory import ShutdownCoordinatorFactory

_HOOKS_ATTR = "__shutdown_hooks__"

# ids of instances whose outermost decorated __init__ is still running
_constructing: Set[int] = set()


class MethodService:
    """Closable wrapping one bound shutdown hook."""

    def __init__(self, method: Callable[[], Any], timeout: Optional[float] = None):
        self.method = method
        self.timeout = timeout
        self.name = getattr(method, "__qualname__", repr(method))

    async def close(self) -> None:
        result = self.method()
        if not inspect.isawaitable(result):
            return
        if self.timeout is None:
            await result
            return
        try:
            await asyncio.wait_for(asyncio.shield(asyncio.ensure_future(result)), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise ShutdownTimeoutError(self.timeout) from None


class ShutdownHook:
    """Method descriptor created by :func:`shutdown_hook`."""

    def __init__(self, func: Callable, timeout: Optional[float], coordinator: Optional[ShutdownCoordinator]):
        self.func = func
        self.timeout = timeout
        self.coordinator = coordinator
        functools.update_wrapper(self, func)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        hooks = owner.__dict__.get(_HOOKS_ATTR)
        if hooks is None:
            hooks = []
            setattr(owner, _HOOKS_ATTR, hooks)
            _wrap_init(owner)
        hooks.append(name)

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return self.func.__get__(instance, owner)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)


def _wrap_init(owner: type) -> None:
    original_init = owner.__init__

    @functools.wraps(original_init)
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        # Only the outermost __init__ in a super() chain registers
        key = id(self)
        if key in _constructing:
            original_init(self, *args, **kwargs)
            return
        _constructing.add(key)
        try:
            original_init(self, *args, **kwargs)
        finally:
            _constructing.discard(key)
        _register_hooks(self)

    owner.__init__ = __init__


def _register_hooks(instance: Any) -> None:
    seen = set()
    for klass in type(instance).__mro__:
        for name in klass.__dict__.get(_HOOKS_ATTR, ()):
            if name in seen:
                continue
            seen.add(name)
            hook = inspect.getattr_static(instance, name)
            if not isinstance(hook, ShutdownHook):
                # Overridden by a plain method in a subclass
                continue
            coordinator = hook.coordinator or ShutdownCoordinatorFactory.get_instance().create_coordinator()
            service = MethodService(getattr(instance, name), hook.timeout)
            try:
                coordinator.add_service(service)
            except ShutdownInProgressError as e:
                coordinator.logger.log_warning(f"Shutdown hook not registered: {e}")


def shutdown_hook(
    timeout: Optional[float] = None,
    coordinator: Optional[ShutdownCoordinator] = None
) -> Callable[[Callable], ShutdownHook]:
    """Run the decorated method on shutdown for every instance of its class.
    
    Args:
        timeout: Seconds the hook may take before it is reported as timed out
        coordinator: Coordinator to register with, defaults to the factory's
            "default" coordinator
    """
    def decorator(func: Callable) -> ShutdownHook:
        return ShutdownHook(func, timeout, coordinator)

    return decorator
