"""
Inter-instance command channel.

Commands are small JSON-serializable dicts (``{"command": "reload-license"}``)
broadcast to every peer instance. Each channel stamps outgoing commands with
its own sender id and ignores commands it sent itself.

The in-memory implementation is suitable for a single process and for tests.
For distributed deployments use the RabbitMQ implementation.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, List, Optional

from django.conf import settings

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Dict[str, Any]], Awaitable[None]]

SENDER_ID_FIELD = "sender_id"


class CommandChannel(ABC):
    """
    Abstract publish/subscribe channel shared by all instances.
    """

    def __init__(self, sender_id: str):
        """
        Initialize the channel.

        Args:
            sender_id: Identifier of this instance, stamped on outgoing commands
        """
        self.sender_id = sender_id
        self._handlers: Dict[str, List[CommandHandler]] = {}

    def subscribe(self, command_name: str, handler: CommandHandler) -> None:
        """
        Subscribe a handler to a command name.

        Args:
            command_name: Command to react to (e.g. ``reload-license``)
            handler: Coroutine function receiving the command payload
        """
        if command_name not in self._handlers:
            self._handlers[command_name] = []
        self._handlers[command_name].append(handler)
        logger.debug("Subscribed %s to command %s", getattr(handler, "__name__", handler), command_name)

    @abstractmethod
    async def publish(self, command: Dict[str, Any]) -> None:
        """
        Publish a command to every peer instance.

        Args:
            command: Command payload, must contain a ``command`` key
        """
        pass

    @abstractmethod
    async def listen(self, stop_event: asyncio.Event) -> None:
        """
        Receive commands until ``stop_event`` is set.

        Args:
            stop_event: Event that ends the listen loop
        """
        pass

    def close(self) -> None:
        """Stop receiving commands. Safe to call more than once."""

    def _envelope(self, command: Dict[str, Any]) -> Dict[str, Any]:
        if "command" not in command:
            raise ValueError("Command payload must contain a 'command' key")
        return {**command, SENDER_ID_FIELD: self.sender_id}

    async def dispatch(self, body: Dict[str, Any]) -> None:
        """
        Dispatch a received command to its handlers.

        Commands sent by this instance are ignored.

        Args:
            body: Received command envelope
        """
        if body.get(SENDER_ID_FIELD) == self.sender_id:
            return

        command_name = body.get("command")
        handlers = self._handlers.get(command_name, [])
        if not handlers:
            logger.debug("No handlers registered for command %s", command_name)
            return

        payload = {key: value for key, value in body.items() if key != SENDER_ID_FIELD}
        results = await asyncio.gather(
            *(handler(payload) for handler in handlers), return_exceptions=True
        )
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    "Error handling command %s with %s: %s",
                    command_name,
                    getattr(handler, "__name__", handler),
                    result,
                    exc_info=result,
                )


class InMemoryCommandBroker:
    """Delivers commands between in-memory channels of one process."""

    def __init__(self):
        self._channels: List["InMemoryCommandChannel"] = []

    def register(self, channel: "InMemoryCommandChannel") -> None:
        self._channels.append(channel)

    def unregister(self, channel: "InMemoryCommandChannel") -> None:
        if channel in self._channels:
            self._channels.remove(channel)

    @property
    def channels(self) -> List["InMemoryCommandChannel"]:
        return list(self._channels)

    async def deliver(self, body: Dict[str, Any]) -> None:
        for channel in list(self._channels):
            await channel.dispatch(body)


default_broker = InMemoryCommandBroker()


class InMemoryCommandChannel(CommandChannel):
    """
    In-memory command channel.

    Channels registered on the same broker behave like peer instances.
    """

    def __init__(self, sender_id: str, broker: Optional[InMemoryCommandBroker] = None):
        super().__init__(sender_id)
        self.broker = broker or default_broker
        self.broker.register(self)

    async def publish(self, command: Dict[str, Any]) -> None:
        body = self._envelope(command)
        logger.info("Publishing command %s", body["command"])
        await self.broker.deliver(body)

    async def listen(self, stop_event: asyncio.Event) -> None:
        # Delivery happens on publish; nothing to poll
        await stop_event.wait()

    def close(self) -> None:
        self.broker.unregister(self)


def build_command_channel(sender_id: str) -> CommandChannel:
    """
    Build the command channel selected by ``settings.COMMAND_CHANNEL``.

    Args:
        sender_id: Identifier of this instance

    Returns:
        CommandChannel implementation
    """
    channel_settings = settings.COMMAND_CHANNEL
    if channel_settings["BACKEND"] == "rabbitmq":
        from core.infrastructure.rabbitmq_command_channel import RabbitMQCommandChannel

        return RabbitMQCommandChannel(
            sender_id=sender_id,
            broker_url=channel_settings["BROKER_URL"],
            exchange_name=channel_settings["EXCHANGE"],
        )
    return InMemoryCommandChannel(sender_id=sender_id)
