"""
Event Listener
Polling subscriptions to contract events with explicit cancellation
"""

import asyncio
import time
from typing import Callable, List, Optional
from web3 import Web3
from loguru import logger


class EventSubscription:
    """
    Handle for one contract event filter

    poll() delivers new logs to the callback, unsubscribe() stops
    delivery and uninstalls the filter on the node.
    """

    def __init__(self, w3: Web3, contract, event_name: str, callback: Callable, from_block='latest'):
        """
        Initialize Event Subscription

        Args:
            w3: Web3 instance
            contract: Deployed contract instance
            event_name: Event to watch
            callback: Called with each decoded event log
            from_block: First block to include
        """
        self.w3 = w3
        self.contract = contract
        self.event_name = event_name
        self.callback = callback

        self.delivered = 0
        self.active = False

        event = getattr(contract.events, event_name)
        self.filter = event.create_filter(from_block=from_block)
        self.active = True

        logger.debug(f"Subscribed to {event_name} on {contract.address}")

    def poll(self) -> int:
        """
        Deliver logs seen since the last poll

        Returns:
            Number of events delivered
        """
        if not self.active:
            return 0

        count = 0

        for event in self.filter.get_new_entries():
            try:
                self.callback(event)
            except Exception as e:
                logger.error(f"Error in {self.event_name} handler: {e}")
            count += 1

        self.delivered += count
        return count

    def unsubscribe(self):
        """Stop delivery. Safe to call more than once."""
        if not self.active:
            return

        self.active = False

        try:
            self.w3.eth.uninstall_filter(self.filter.filter_id)
        except Exception as e:
            logger.warning(f"Could not uninstall {self.event_name} filter: {e}")

        logger.debug(f"Unsubscribed from {self.event_name}")


class EventListener:
    """
    Owns a set of subscriptions and polls them until stopped
    """

    def __init__(self, w3: Web3, poll_interval: float = 2.0):
        self.w3 = w3
        self.poll_interval = poll_interval
        self.subscriptions: List[EventSubscription] = []
        self.running = False

    def subscribe(self, contract, event_name: str, callback: Callable, from_block='latest') -> EventSubscription:
        """Start watching an event"""
        subscription = EventSubscription(self.w3, contract, event_name, callback, from_block=from_block)
        self.subscriptions.append(subscription)
        return subscription

    def poll_once(self) -> int:
        """Poll every active subscription once"""
        delivered = 0

        for subscription in self.subscriptions:
            try:
                delivered += subscription.poll()
            except Exception as e:
                logger.error(f"Error polling {subscription.event_name}: {e}")

        return delivered

    async def listen(self, duration: Optional[float] = None):
        """
        Poll until stop() is called or duration elapses

        Args:
            duration: Seconds to listen, None for no deadline
        """
        self.running = True
        deadline = time.monotonic() + duration if duration is not None else None

        logger.info(f"Listening for events on {len(self.subscriptions)} subscriptions...")

        try:
            while self.running:
                self.poll_once()

                if deadline is not None and time.monotonic() >= deadline:
                    break

                await asyncio.sleep(self.poll_interval)
        finally:
            self.running = False
            self.unsubscribe_all()

    def stop(self):
        """Request listen() to return"""
        self.running = False

    def unsubscribe_all(self):
        for subscription in self.subscriptions:
            subscription.unsubscribe()

        logger.info("Event monitoring stopped")
