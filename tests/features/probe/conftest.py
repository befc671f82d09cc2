"""BDD step definitions for probe features."""

import asyncio
from dataclasses import dataclass, field

import httpx
import pytest
from pytest_bdd import given, parsers, then, when

from commonstatus_exporter.adapters.fetch import HttpxStatusFetcher
from commonstatus_exporter.adapters.frameworks.fastapi import create_app
from commonstatus_exporter.core.lifetime import LifetimeCounters


@dataclass
class ProbeScenarioContext:
    """State shared between the steps of one scenario."""

    counters: LifetimeCounters = field(default_factory=LifetimeCounters)
    transport: httpx.MockTransport | None = None
    response: httpx.Response | None = None


@pytest.fixture
def ctx() -> ProbeScenarioContext:
    """Fresh scenario context for each test."""
    return ProbeScenarioContext()


def _samples(text: str) -> dict[str, float]:
    samples: dict[str, float] = {}
    for line in text.splitlines():
        if not line or line.startswith("#"):
            continue
        name, _, value = line.rpartition(" ")
        samples[name] = float(value)
    return samples


async def _probe(ctx: ProbeScenarioContext) -> httpx.Response:
    app = create_app(
        fetcher=HttpxStatusFetcher(transport=ctx.transport), counters=ctx.counters
    )
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        return await client.get("/probe", params={"target": "http://app/status"})


# === Given ===
@given("fresh lifetime counters")
def step_fresh_counters(ctx: ProbeScenarioContext) -> None:
    ctx.counters = LifetimeCounters()


@given("a target serving:")
def step_target_serving(ctx: ProbeScenarioContext, docstring: str) -> None:
    ctx.transport = httpx.MockTransport(lambda request: httpx.Response(200, text=docstring))


@given("an unreachable target")
def step_unreachable_target(ctx: ProbeScenarioContext) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    ctx.transport = httpx.MockTransport(refuse)


# === When ===
@when("the target is probed")
def step_probe(ctx: ProbeScenarioContext) -> None:
    ctx.response = asyncio.run(_probe(ctx))


# === Then ===
@then(parsers.parse("the response status should be {code:d}"))
def step_status(ctx: ProbeScenarioContext, code: int) -> None:
    assert ctx.response is not None
    assert ctx.response.status_code == code


@then(parsers.parse('the metric "{name}" should be {value:g}'))
def step_metric_value(ctx: ProbeScenarioContext, name: str, value: float) -> None:
    assert ctx.response is not None
    samples = _samples(ctx.response.text)
    assert samples[name] == pytest.approx(value)


@then(parsers.parse("the lifetime failure count should be {n:d}"))
def step_failure_count(ctx: ProbeScenarioContext, n: int) -> None:
    assert ctx.counters.snapshot().failures == n
