from __future__ import annotations

from pathlib import Path

import pytest

from ltcreports.scraper import facility_scraper
from ltcreports.scraper.discovery import Facility
from ltcreports.scraper.error_codes import ErrorCode, NavigationError, SiteStructureError
from ltcreports.scraper.facility_scraper import Document, scrape_facility
from ltcreports.scraper.site_adapter import LTC_HOMES_SELECTORS
from ltcreports.scraper.utils import sanitize_home_name
from tests.fake_site import FakeContext, FakeSite

HOME_URL = "https://ltc.example/home/ab"


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    sleeps: list[float] = []
    monkeypatch.setattr(facility_scraper.time, "sleep", lambda seconds: sleeps.append(seconds))
    return sleeps


def test_scrape_collects_documents_in_page_order(tmp_path: Path, no_sleep: list[float]) -> None:
    site = FakeSite()
    site.add_home(HOME_URL, [("Report", "https://ltc.example/1"), ("Report", "https://ltc.example/2")])
    context = FakeContext(site)

    result = scrape_facility(
        context, Facility("A/B", HOME_URL), report_dir=tmp_path, settle_seconds=1.0
    )

    assert result.home == "A-B"
    assert result.directory == tmp_path / "A-B"
    assert result.directory.is_dir()
    assert result.documents == [
        Document("Report", "https://ltc.example/1"),
        Document("Report", "https://ltc.example/2"),
    ]
    reveal = site.pages[HOME_URL][LTC_HOMES_SELECTORS.reveal_control][0]
    assert reveal.clicks == 1
    assert no_sleep == [1.0, 1.0]
    assert [page.closed for page in context.pages] == [True]


def test_existing_directory_is_reused(tmp_path: Path) -> None:
    site = FakeSite()
    site.add_home(HOME_URL, [("Report", "https://ltc.example/1")])
    existing = tmp_path / "A-B"
    existing.mkdir()
    (existing / "Report.pdf").write_bytes(b"kept")

    result = scrape_facility(FakeContext(site), Facility("A/B", HOME_URL), report_dir=tmp_path)

    assert result.directory == existing
    assert (existing / "Report.pdf").read_bytes() == b"kept"


def test_navigation_failure_raises_and_closes_page(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(facility_scraper.config, "N_RETRIES", 5)
    site = FakeSite()
    site.add_home(HOME_URL, [("Report", "https://ltc.example/1")])
    site.fail_goto(HOME_URL, 5)
    context = FakeContext(site)

    with pytest.raises(NavigationError) as excinfo:
        scrape_facility(context, Facility("A/B", HOME_URL), report_dir=tmp_path)

    assert excinfo.value.error_code == ErrorCode.NAVIGATION
    assert len(site.goto_calls) == 5
    assert context.pages[0].closed is True
    assert not (tmp_path / "A-B").exists()


def test_navigation_attempts_follow_the_given_retry_count(tmp_path: Path) -> None:
    site = FakeSite()
    site.add_home(HOME_URL, [("Report", "https://ltc.example/1")])
    site.fail_goto(HOME_URL, 5)

    with pytest.raises(NavigationError):
        scrape_facility(FakeContext(site), Facility("A/B", HOME_URL), report_dir=tmp_path, retries=2)

    assert len(site.goto_calls) == 2


def test_missing_reveal_control_raises(tmp_path: Path) -> None:
    site = FakeSite()
    site.add_home(HOME_URL, [("Report", "https://ltc.example/1")], reveal=False)
    context = FakeContext(site)

    with pytest.raises(SiteStructureError):
        scrape_facility(context, Facility("Cedar", HOME_URL), report_dir=tmp_path)

    assert context.pages[0].closed is True


def test_no_documents(tmp_path: Path) -> None:
    site = FakeSite()
    site.add_home(HOME_URL, [])

    result = scrape_facility(FakeContext(site), Facility("Cedar", HOME_URL), report_dir=tmp_path)

    assert result.documents == []
    assert result.directory.is_dir()


@pytest.mark.parametrize(
    "name, expected",
    [
        ("A/B", "A-B"),
        ('The "Grove"', "The Grove"),
        ("Home: East/West", "Home- East-West"),
        ("Plain Name", "Plain Name"),
    ],
)
def test_home_names_lose_path_hostile_characters(name: str, expected: str) -> None:
    home = sanitize_home_name(name)

    assert home == expected
    assert not set('/":') & set(home)
