# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Event forwarding.

Target objects expose `Event` slots as attributes. An EventListener, bound to
a contract and a target, attaches one forwarding callback per declared event;
when the target fires an event the callback hands the event's preferred name
and its positional arguments to an EventBroadcaster, which fans them out to
every EventNotifier in registration order.

Subscriber lists are plain lists: attaching, detaching and firing from
several threads at once is not supported.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol

from objinvokers.contract.builder import Contract
from objinvokers.contract.parser import EventDecl

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class EventNotifier(Protocol):
	"""Sink for forwarded events."""

	def notify_event(self, event_name: str, arguments: List[Any]) -> None: ...


class Event:
	"""
	A subscribable event slot.

		class Door:
			def __init__(self):
				self.opened = Event()

		door.opened += handler
		door.opened.fire("front")
	"""

	def __init__(self) -> None:
		self._handlers: List[Handler] = []

	def subscribe(self, handler: Handler) -> None:
		self._handlers.append(handler)

	def unsubscribe(self, handler: Handler) -> None:
		"""Remove one registration of `handler`; unknown handlers are ignored."""
		if handler in self._handlers:
			self._handlers.remove(handler)

	def __iadd__(self, handler: Handler) -> "Event":
		self.subscribe(handler)
		return self

	def __isub__(self, handler: Handler) -> "Event":
		self.unsubscribe(handler)
		return self

	def fire(self, *args: Any) -> None:
		# Snapshot so handlers may unsubscribe while being notified.
		for handler in list(self._handlers):
			handler(*args)

	__call__ = fire

	def __len__(self) -> int:
		return len(self._handlers)

	def __contains__(self, handler: object) -> bool:
		return handler in self._handlers


class EventBroadcaster:
	"""Forward every notification to all registered notifiers, in order."""

	def __init__(self, *notifiers: EventNotifier) -> None:
		self.notifiers: List[EventNotifier] = list(notifiers)

	def notify_event(self, event_name: str, arguments: List[Any]) -> None:
		for notifier in self.notifiers:
			notifier.notify_event(event_name, arguments)


def _make_forwarder(notifier: EventNotifier, event_name: str) -> Handler:
	def forward(*args: Any) -> None:
		notifier.notify_event(event_name, list(args))

	forward.__name__ = f"forward_{event_name}"
	return forward


class EventListener:
	"""
	Subscribe to the events of a target object and forward them to notifiers.

	Listening starts with `start_listening` (or on entering a `with` block) and
	stops with `stop_listening`, `close`, or on leaving the block. Both
	operations are idempotent.
	"""

	@classmethod
	def bind(
		cls,
		contract: Contract,
		target_instance: Any,
		*notifiers: EventNotifier,
		event_match: Optional[Callable[[EventDecl], bool]] = None,
		preferred_name_selector: Optional[Callable[[EventDecl], Optional[str]]] = None,
	) -> "EventListener":
		"""
		Build a listener for the events declared by `contract`.

		`event_match` filters the declared events; `preferred_name_selector`
		renames them (returning None keeps the declared preferred name).
		"""
		broadcaster = EventBroadcaster(*notifiers)
		subscribers: Dict[str, Handler] = {}
		for decl in contract.events:
			if event_match is not None and not event_match(decl):
				continue
			selected = preferred_name_selector(decl) if preferred_name_selector is not None else None
			subscribers[decl.name] = _make_forwarder(broadcaster, selected or decl.preferred_name or decl.name)
		return cls(subscribers, target_instance)

	def __init__(self, subscribers: Dict[str, Handler], target_instance: Any) -> None:
		self._subscribers = dict(subscribers)
		self.target_instance = target_instance
		self._listening = False

	@property
	def is_listening(self) -> bool:
		return self._listening

	@property
	def event_names(self) -> List[str]:
		return list(self._subscribers)

	def start_listening(self) -> None:
		if self._listening:
			return
		# Resolve every slot first so a bad attribute attaches nothing.
		slots = [(self._slot(name), forwarder) for name, forwarder in self._subscribers.items()]
		for slot, forwarder in slots:
			slot.subscribe(forwarder)
		self._listening = True
		logger.debug("listening to %d event(s) on %r", len(self._subscribers), self.target_instance)

	def stop_listening(self) -> None:
		if not self._listening:
			return
		for name, forwarder in self._subscribers.items():
			self._slot(name).unsubscribe(forwarder)
		self._listening = False
		logger.debug("stopped listening on %r", self.target_instance)

	def close(self) -> None:
		self.stop_listening()
		self._subscribers.clear()

	def __enter__(self) -> "EventListener":
		self.start_listening()
		return self

	def __exit__(self, exc_type, exc, tb) -> None:
		self.close()

	def _slot(self, name: str) -> Event:
		slot = getattr(self.target_instance, name)
		if not isinstance(slot, Event):
			raise TypeError(f"attribute '{name}' of {type(self.target_instance).__name__} is not an Event")
		return slot


__all__ = ["Event", "EventNotifier", "EventBroadcaster", "EventListener"]
