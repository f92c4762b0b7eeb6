"""
Message Bus

Routes commands to their single handler and domain events to any number
of subscribers.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]
CommandHandler = Callable[[Any], Any]


class MessageBus:
    """
    Message bus for commands and events

    Commands: One handler per command (1:1), errors propagate to the caller
    Events: Multiple handlers per event (1:N), errors are logged and isolated
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = defaultdict(list)
        self._command_handlers: Dict[Type, CommandHandler] = {}

    def register_event_handler(self, event_type: Type[DomainEvent], handler: EventHandler):
        self._event_handlers[event_type].append(handler)
        logger.debug("Registered event handler %s for %s", _name(handler), event_type.__name__)

    def register_command_handler(self, command_type: Type, handler: CommandHandler):
        if command_type in self._command_handlers:
            raise ValueError(
                f"Handler for {command_type.__name__} is already registered. "
                "Commands can have only one handler."
            )
        self._command_handlers[command_type] = handler
        logger.debug("Registered command handler for %s", command_type.__name__)

    def handles(self, command_type: Type) -> bool:
        return command_type in self._command_handlers

    def handle_command(self, command: Any) -> Any:
        """
        Dispatch a command and return the handler's result

        Raises ValueError if no handler is registered. Domain errors raised
        by the handler propagate unchanged.
        """
        command_type = type(command)
        handler = self._command_handlers.get(command_type)
        if handler is None:
            raise ValueError(f"No handler registered for command {command_type.__name__}")

        logger.info("Handling command: %s", command_type.__name__)
        try:
            return handler(command)
        except Exception as e:
            logger.warning("Command %s failed: %s", command_type.__name__, e)
            raise

    def publish_events(self, events: Iterable[DomainEvent]):
        """
        Deliver events to their subscribers

        A failing subscriber is logged and does not prevent the others from
        running: by the time events are published the transaction is committed.
        """
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type)
            if not handlers:
                logger.debug("No handlers registered for event %s", event_type.__name__)
                continue

            logger.info("Publishing event: %s (ID: %s)", event_type.__name__, event.event_id)
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Error in event handler %s for event %s", _name(handler), event_type.__name__
                    )

    def reset(self):
        """Drop every registration"""
        self._event_handlers.clear()
        self._command_handlers.clear()


def _name(handler) -> str:
    return getattr(handler, '__qualname__', None) or handler.__class__.__name__


# Global message bus instance, wired in BookingsConfig.ready()
message_bus = MessageBus()
