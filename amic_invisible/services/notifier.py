from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from loguru import logger
from requests import RequestException
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from amic_invisible.core.config import GameConfig

MESSAGE_TEMPLATE = "🎄 Hola {name}! Ací tens el teu link per a l'Amic Invisible: {url}"

STATUS_SENT = "sent"
STATUS_SKIPPED = "skipped"
STATUS_ERROR = "error"


class NotificationDeliveryError(RuntimeError):
    pass


class SmsSender(Protocol):
    def send(self, to: str, body: str) -> str:
        ...


class TwilioSender:
    def __init__(self, client: Client, from_number: str) -> None:
        self.client = client
        self.from_number = from_number

    def send(self, to: str, body: str) -> str:
        try:
            message = self.client.messages.create(body=body, from_=self.from_number, to=to)
        except (TwilioException, RequestException) as exc:
            raise NotificationDeliveryError(str(exc)) from exc
        return message.sid


def build_sender(config: GameConfig) -> Optional[TwilioSender]:
    twilio = config.twilio
    if config.skip_sms or not twilio:
        return None
    if not (twilio.account_sid and twilio.auth_token and twilio.from_number):
        logger.warning("Incomplete Twilio credentials, SMS delivery disabled")
        return None
    return TwilioSender(Client(twilio.account_sid, twilio.auth_token), twilio.from_number)


def format_message(name: str, url: str) -> str:
    return MESSAGE_TEMPLATE.format(name=name, url=url)


@dataclass(frozen=True)
class Delivery:
    name: str
    phone: Optional[str]
    url: str


@dataclass(frozen=True)
class DeliveryResult:
    name: str
    status: str
    sid: Optional[str] = None
    error: Optional[str] = None


@dataclass
class NotificationReport:
    dry_run: bool
    results: List[DeliveryResult] = field(default_factory=list)

    def _count(self, status: str) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def sent(self) -> int:
        return self._count(STATUS_SENT)

    @property
    def skipped(self) -> int:
        return self._count(STATUS_SKIPPED)

    @property
    def errors(self) -> int:
        return self._count(STATUS_ERROR)


class Notifier:
    """Sends every participant their personal link, one message at a time.

    A failed delivery is recorded and the batch carries on with the next
    participant.
    """

    def __init__(self, sender: Optional[SmsSender], dry_run: bool = False) -> None:
        self.sender = sender
        self.dry_run = dry_run

    def _deliver(self, delivery: Delivery) -> DeliveryResult:
        message = format_message(delivery.name, delivery.url)
        log = logger.bind(name=delivery.name, phone=delivery.phone)

        if self.dry_run:
            log.info("[dry run] SMS for {name} ({phone}): {message}",
                     name=delivery.name, phone=delivery.phone, message=message)
            return DeliveryResult(delivery.name, STATUS_SKIPPED)

        if self.sender is None:
            log.error("SMS provider is not configured")
            return DeliveryResult(delivery.name, STATUS_ERROR, error="SMS provider is not configured")
        if not delivery.phone:
            log.error("No phone number for {name}", name=delivery.name)
            return DeliveryResult(delivery.name, STATUS_ERROR, error="missing phone number")

        log.info("Sending SMS to {name} ({phone})", name=delivery.name, phone=delivery.phone)
        try:
            sid = self.sender.send(delivery.phone, message)
        except NotificationDeliveryError as exc:
            log.warning("Failed to send SMS: {error}", error=str(exc))
            return DeliveryResult(delivery.name, STATUS_ERROR, error=str(exc))

        log.info("Sent, SID: {sid}", sid=sid)
        return DeliveryResult(delivery.name, STATUS_SENT, sid=sid)

    def notify_all(self, deliveries: Sequence[Delivery]) -> NotificationReport:
        report = NotificationReport(dry_run=self.dry_run)
        for delivery in deliveries:
            report.results.append(self._deliver(delivery))

        if self.dry_run:
            logger.warning(
                "Test mode active (skipSms: true): {count} messages were not sent",
                count=report.skipped,
            )
        else:
            logger.info(
                "Summary: {sent} sent, {errors} errors",
                sent=report.sent,
                errors=report.errors,
            )
        return report
