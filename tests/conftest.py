from dataclasses import dataclass

import pytest


@dataclass(frozen=True)
class FakeEvent:
    name: str
    payload: str


class MapDecoder:
    """Decoder returning a fixed event per known payload; records every call."""

    def __init__(self, mapping: dict[str, FakeEvent]) -> None:
        self.mapping = mapping
        self.calls: list[str] = []

    def decode(self, payload: str) -> FakeEvent | None:
        self.calls.append(payload)
        return self.mapping.get(payload)


class EchoDecoder:
    def decode(self, payload: str) -> FakeEvent:
        return FakeEvent(name="Echo", payload=payload)


class NeverDecoder:
    def decode(self, payload: str) -> None:
        return None


@pytest.fixture
def event_a() -> FakeEvent:
    return FakeEvent(name="EventA", payload="hello")


@pytest.fixture
def map_decoder(event_a: FakeEvent) -> MapDecoder:
    return MapDecoder({"hello": event_a})


@pytest.fixture
def echo_decoder() -> EchoDecoder:
    return EchoDecoder()


@pytest.fixture
def never_decoder() -> NeverDecoder:
    return NeverDecoder()


@pytest.fixture
def make_event():
    return FakeEvent


@pytest.fixture
def make_decoder():
    return MapDecoder


@pytest.fixture
def nested_logs() -> list[str]:
    # Root X calls T1, which calls T2; T1 logs around the inner call.
    return [
        "Program X invoke [1]",
        "Program log: root says hi",
        "Program T1 invoke [2]",
        "Program log: first",
        "Program T2 invoke [3]",
        "Program log: inner",
        "Program T2 consumed 50 of 1000 compute units",
        "Program T2 success",
        "Program log: second",
        "Program T1 consumed 300 of 1200 compute units",
        "Program T1 success",
        "Program log: root again",
        "Program X consumed 900 of 2000 compute units",
        "Program X success",
    ]
