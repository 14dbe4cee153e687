from __future__ import annotations

import pytest

from ltcreports.scraper import navigation
from tests.fake_site import FakePage, FakeSite

URL = "https://ltc.example/home/1"


@pytest.fixture
def sleeps(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    recorded: list[float] = []
    monkeypatch.setattr(navigation.time, "sleep", lambda seconds: recorded.append(seconds))
    return recorded


def test_returns_true_on_first_success(sleeps: list[float]) -> None:
    site = FakeSite()
    page = FakePage(site)

    assert navigation.attempt_navigate(page, URL, retries=5, delay_seconds=1.0) is True
    assert site.goto_calls == [URL]
    assert sleeps == []


def test_gives_up_after_five_failures_without_raising(sleeps: list[float]) -> None:
    site = FakeSite()
    site.fail_goto(URL, 5)
    page = FakePage(site)

    assert navigation.attempt_navigate(page, URL, retries=5, delay_seconds=1.0) is False
    assert len(site.goto_calls) == 5
    assert sleeps == [1.0] * 5


def test_succeeds_on_fifth_attempt(sleeps: list[float]) -> None:
    site = FakeSite()
    site.fail_goto(URL, 4)
    page = FakePage(site)

    assert navigation.attempt_navigate(page, URL, retries=5, delay_seconds=1.0) is True
    assert len(site.goto_calls) == 5
    assert sleeps == [1.0] * 4
    assert page.url == URL


def test_defaults_come_from_config(monkeypatch: pytest.MonkeyPatch, sleeps: list[float]) -> None:
    monkeypatch.setattr(navigation.config, "N_RETRIES", 2)
    monkeypatch.setattr(navigation.config, "NAV_RETRY_DELAY_SECONDS", 0.25)
    site = FakeSite()
    site.fail_goto(URL, 10)

    assert navigation.attempt_navigate(FakePage(site), URL) is False
    assert len(site.goto_calls) == 2
    assert sleeps == [0.25, 0.25]


def test_failures_are_logged(monkeypatch: pytest.MonkeyPatch, sleeps: list[float]) -> None:
    messages: list[str] = []
    monkeypatch.setattr(navigation, "log_line", lambda msg: messages.append(msg))
    site = FakeSite()
    site.fail_goto(URL, 1)

    navigation.attempt_navigate(FakePage(site), URL, retries=3, delay_seconds=0)

    assert any("retrying" in msg and URL in msg for msg in messages)


def test_events_carry_navigation_target(monkeypatch: pytest.MonkeyPatch, sleeps: list[float]) -> None:
    events: list[tuple[str, dict]] = []
    monkeypatch.setattr(
        navigation, "_scraper_event", lambda label, **fields: events.append((label, fields))
    )
    site = FakeSite()
    site.fail_goto(URL, 1)

    assert navigation.attempt_navigate(
        FakePage(site), URL, retries=3, delay_seconds=0, label="directory"
    ) is True

    assert site.goto_calls == [URL, URL]
    assert [label for label, _ in events] == ["nav", "error", "nav"]
    assert all(fields["target"] == "directory" for _, fields in events)
    assert events[1][1]["step"] == "goto_exception"


def test_labelled_navigation_reaches_the_page(sleeps: list[float]) -> None:
    site = FakeSite()
    site.fail_goto(URL, 2)

    assert navigation.attempt_navigate(
        FakePage(site), URL, retries=2, delay_seconds=0, label="Maple Grove"
    ) is False
    assert site.goto_calls == [URL, URL]


def test_goto_uses_configured_timeout(monkeypatch: pytest.MonkeyPatch, sleeps: list[float]) -> None:
    monkeypatch.setattr(navigation.config, "NAV_TIMEOUT_SECONDS", 45)
    site = FakeSite()

    navigation.attempt_navigate(FakePage(site), URL, retries=1, delay_seconds=0)

    assert site.goto_kwargs == [{"timeout": 45000}]
