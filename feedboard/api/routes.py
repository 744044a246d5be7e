from fastapi import APIRouter, Depends, Query, Request

from feedboard.core.auth import require_api_key
from feedboard.core.responses import NO_FEEDS_NOTICE, success_response
from feedboard.schemas import ALL_THEMES, SidebarTab, ViewState
from feedboard.services.snapshot import FeedSnapshot, SnapshotCache
from feedboard.services.views import build_view, list_themes

router = APIRouter(prefix="/v1", tags=["v1"])


def get_snapshots(request: Request) -> SnapshotCache:
    return request.app.state.snapshots


def _meta(snapshot: FeedSnapshot) -> dict:
    meta = {"fetched_at": snapshot.fetched_at.isoformat()}
    if not snapshot.feeds:
        meta["notice"] = NO_FEEDS_NOTICE
    return meta


@router.get("/feeds")
async def list_feeds(snapshots: SnapshotCache = Depends(get_snapshots)):
    snapshot = await snapshots.get()
    data = {
        "feeds": [feed.model_dump(mode="json") for feed in snapshot.feeds],
        "themes": list_themes(snapshot.feeds),
    }
    return success_response(data, _meta(snapshot))


@router.get("/articles")
async def list_articles(
    theme: str = ALL_THEMES,
    tab: SidebarTab = SidebarTab.sites,
    site: list[str] = Query(default=[]),
    author: list[str] = Query(default=[]),
    snapshots: SnapshotCache = Depends(get_snapshots),
):
    snapshot = await snapshots.get()
    state = ViewState(theme=theme, tab=tab, sites=frozenset(site), authors=frozenset(author))
    view = build_view(snapshot.articles, snapshot.feeds, state)
    return success_response(view.model_dump(mode="json", by_alias=True), _meta(snapshot))


@router.post("/refresh", dependencies=[Depends(require_api_key)])
async def refresh_feeds(snapshots: SnapshotCache = Depends(get_snapshots)):
    snapshot = await snapshots.refresh()
    data = {"feeds_count": len(snapshot.feeds), "articles_count": len(snapshot.articles)}
    return success_response(data, _meta(snapshot))
