from fastapi.testclient import TestClient

from virelia.core.search import SearchDebouncer, search_products
from virelia.main import app


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_search_matches_title_category_and_description(sample_products):
    assert [p.slug for p in search_products(sample_products, "olive")] == ["olive-oil"]
    assert [p.slug for p in search_products(sample_products, "ready-to-use")] == ["pizza-sauces"]
    assert [p.slug for p in search_products(sample_products, "  HARISSA ")] == ["harissa"]


def test_blank_query_returns_nothing(sample_products):
    assert search_products(sample_products, "") == []
    assert search_products(sample_products, "   ") == []


def test_debouncer_releases_query_after_delay():
    clock = FakeClock()
    debouncer = SearchDebouncer(delay=0.2, clock=clock)
    debouncer.submit("oli")
    assert debouncer.ready() is None
    clock.now += 0.25
    assert debouncer.ready() == "oli"
    assert debouncer.pending is None
    assert debouncer.ready() is None


def test_new_input_replaces_pending_query():
    clock = FakeClock()
    debouncer = SearchDebouncer(delay=0.2, clock=clock)
    debouncer.submit("o")
    clock.now += 0.15
    debouncer.submit("ol")
    clock.now += 0.1
    assert debouncer.ready() is None
    assert debouncer.pending == "ol"
    clock.now += 0.2
    assert debouncer.ready() == "ol"


def test_cancel_discards_pending_query():
    clock = FakeClock()
    debouncer = SearchDebouncer(clock=clock)
    debouncer.submit("sambal")
    debouncer.cancel()
    clock.now += 1
    assert debouncer.ready() is None


def test_debounced_query_drives_search_endpoint():
    clock = FakeClock()
    debouncer = SearchDebouncer(delay=0.2, clock=clock)
    sent = []
    for text in ("c", "co", "coffee"):
        debouncer.submit(text)
        clock.now += 0.05
        query = debouncer.ready()
        if query:
            sent.append(query)
    clock.now += 0.5
    sent.append(debouncer.ready())

    assert sent == ["coffee"]
    results = TestClient(app).get("/catalog/search", params={"q": sent[0]}).json()["results"]
    assert [p["slug"] for p in results] == ["whole-coffee-beans", "ground-coffee"]
