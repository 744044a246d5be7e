def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_list_feeds_envelope(client):
    resp = client.get("/v1/feeds")
    assert resp.status_code == 200
    body = resp.json()
    assert body["error"] is None
    assert [feed["name"] for feed in body["data"]["feeds"]] == [
        "Board Games Example",
        "Dice Example",
        "Missing Example",
    ]
    assert body["data"]["themes"] == ["All", "Board Games", "Dice"]
    assert "fetched_at" in body["meta"]
    assert "X-Trace-Id" in resp.headers


def test_articles_sorted_and_failing_feed_dropped(client):
    resp = client.get("/v1/articles")
    assert resp.status_code == 200
    view = resp.json()["data"]
    assert [article["title"] for article in view["articles"]] == [
        "Wingspan & Friends: A Review",
        "Dice tower of the week",
        "Kickstarter roundup",
    ]
    first = view["articles"][0]
    assert first["feedName"] == "Board Games Example"
    assert first["pubDate"] == "Tue, 02 Jan 2024 00:00:00 GMT"
    assert first["creator"] == "Ana & Bo"
    assert view["feeds_count"] == 3
    assert view["articles_count"] == 3


def test_articles_theme_filter_and_stats(client):
    resp = client.get("/v1/articles", params={"theme": "Dice"})
    view = resp.json()["data"]
    assert [article["feedName"] for article in view["articles"]] == ["Dice Example"]
    assert view["sites"] == [{"site": "Dice Example", "count": 1}]
    assert view["authors"] == [{"author": "Cy", "count": 1}]


def test_articles_author_selection(client):
    resp = client.get("/v1/articles", params={"tab": "authors", "author": ["Cy"]})
    view = resp.json()["data"]
    assert [article["title"] for article in view["articles"]] == ["Dice tower of the week", "Kickstarter roundup"]
    assert [row["author"] for row in view["authors"]] == ["Cy", "Ana & Bo"]
    assert view["state"]["tab"] == "authors"


def test_articles_site_selection(client):
    resp = client.get("/v1/articles", params={"site": ["Board Games Example"]})
    view = resp.json()["data"]
    assert {article["feedName"] for article in view["articles"]} == {"Board Games Example"}
    assert view["articles_count"] == 2


def test_invalid_tab_is_validation_error(client):
    resp = client.get("/v1/articles", params={"tab": "nope"})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_refresh_returns_counts(client):
    resp = client.post("/v1/refresh")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"feeds_count": 3, "articles_count": 3}


def test_no_feeds_configured_notice(client, tmp_path, monkeypatch):
    empty = tmp_path / "feeds.yaml"
    empty.write_text("feeds: []\n", encoding="utf-8")
    monkeypatch.setenv("FEEDS_CONFIG_PATH", str(empty))

    from feedboard.core.config import get_settings

    get_settings.cache_clear()
    resp = client.post("/v1/refresh")
    assert resp.status_code == 200
    assert resp.json()["meta"]["notice"] == "No feeds configured"

    articles = client.get("/v1/articles").json()
    assert articles["data"]["articles"] == []
    assert articles["meta"]["notice"] == "No feeds configured"


def test_registry_failure_is_503(client, tmp_path, monkeypatch):
    monkeypatch.setenv("FEEDS_CONFIG_PATH", str(tmp_path / "missing.yaml"))

    from feedboard.core.config import get_settings

    get_settings.cache_clear()
    resp = client.post("/v1/refresh")
    assert resp.status_code == 503
    error = resp.json()["error"]
    assert error["code"] == "FEEDS_UNAVAILABLE"
    assert error["message"] == "Failed to load feeds"


def test_refresh_requires_api_key_when_enabled(client, monkeypatch):
    monkeypatch.setenv("API_AUTH_ENABLED", "true")
    monkeypatch.setenv("API_AUTH_TOKEN", "secret")

    from feedboard.core.config import get_settings

    get_settings.cache_clear()
    assert client.post("/v1/refresh").status_code == 401
    assert client.post("/v1/refresh", headers={"X-API-Key": "secret"}).status_code == 200


def test_metrics_endpoint(client):
    client.get("/v1/articles")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "feedboard_feed_fetch_total" in resp.text
