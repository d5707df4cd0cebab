"""
Compilation registry.

The single source of truth for named models during one compilation. Producers
register models; consumers (merge engine, code emitters, output collectors)
subscribe to registry events and react synchronously, in subscription order.
A listener that raises aborts the remaining listeners and propagates to the
caller of the registering method.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any

from ..errors import DuplicateNameError, NotFoundError
from ..models import Model

logger = logging.getLogger(__name__)


class RegistryEvent(Enum):
    """Events dispatched by the registry."""

    MODEL_REGISTERED = "model-registered"
    MODEL_REGISTERED_SILENTLY = "model-registered-silently"
    OUTPUT_CODE_LINES_REGISTERED = "output-code-lines-registered"


Listener = Callable[[Any], None]


class CompilationRegistry:
    """Named model store with synchronous publish/subscribe."""

    def __init__(self):
        self._models: dict[str, Model] = {}
        self._listeners: dict[RegistryEvent, list[Listener]] = {event: [] for event in RegistryEvent}

    def on(self, event: RegistryEvent, listener: Listener) -> None:
        """Subscribe a listener to an event."""
        self._listeners[event].append(listener)

    def register_model(self, model: Model) -> None:
        """
        Register a model and notify ``MODEL_REGISTERED`` listeners.

        Raises:
            DuplicateNameError: If a model with the same name is registered
        """
        self._register(RegistryEvent.MODEL_REGISTERED, model)

    def register_model_silently(self, model: Model) -> None:
        """
        Register a derived model and notify ``MODEL_REGISTERED_SILENTLY`` listeners.

        Used for models that must not trigger further derivation (merged
        interfaces, built-in types).

        Raises:
            DuplicateNameError: If a model with the same name is registered
        """
        self._register(RegistryEvent.MODEL_REGISTERED_SILENTLY, model)

    def _register(self, event: RegistryEvent, model: Model) -> None:
        if self.has_model(model.name):
            raise DuplicateNameError(f"{model.name} is already registered")
        self._models[model.name] = model
        logger.debug("Registered %s %s (%s)", type(model).__name__, model.name, event.value)
        self._dispatch(event, model)

    def has_model(self, name: str) -> bool:
        return name in self._models

    def get_model(self, name: str) -> Model:
        """
        Look up a model by name.

        Raises:
            NotFoundError: If no model with this name is registered
        """
        try:
            return self._models[name]
        except KeyError:
            raise NotFoundError(f"{name} is not registered") from None

    def models(self) -> Iterator[Model]:
        """Iterate over registered models in registration order."""
        return iter(list(self._models.values()))

    def register_output_code_lines(self, lines: list[str]) -> None:
        """Broadcast generated source lines to ``OUTPUT_CODE_LINES_REGISTERED`` listeners."""
        self._dispatch(RegistryEvent.OUTPUT_CODE_LINES_REGISTERED, lines)

    def _dispatch(self, event: RegistryEvent, payload: Any) -> None:
        listeners = self._listeners[event]
        if not listeners:
            logger.debug("Event %s does not have a listener", event.value)
        for listener in listeners:
            listener(payload)
