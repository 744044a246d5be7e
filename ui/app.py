import os
from datetime import UTC, datetime

import requests
import streamlit as st

from feedboard.utils.text import card_snippet
from feedboard.utils.timestamps import parse_timestamp

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
API_AUTH_TOKEN = os.getenv("API_AUTH_TOKEN", "")


def _headers() -> dict[str, str]:
    return {"X-API-Key": API_AUTH_TOKEN} if API_AUTH_TOKEN else {}


def _relative(pub_date: str) -> str:
    parsed = parse_timestamp(pub_date)
    if parsed is None:
        return "Unknown date"
    seconds = int((datetime.now(UTC) - parsed).total_seconds())
    if seconds < 0:
        return parsed.strftime("%Y-%m-%d")
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            value = seconds // size
            return f"{value} {unit}{'s' if value != 1 else ''} ago"
    return "just now"


def _reset_selection() -> None:
    st.session_state["selected_sites"] = []
    st.session_state["selected_authors"] = []


st.set_page_config(page_title="Feedboard", layout="wide")
st.session_state.setdefault("theme", "All")
st.session_state.setdefault("tab", "sites")

header_col, refresh_col = st.columns([5, 1])
header_col.title("Feedboard")
if refresh_col.button("Refresh feeds"):
    refresh = requests.post(f"{API_BASE_URL}/v1/refresh", headers=_headers(), timeout=120)
    if not refresh.ok:
        st.error(refresh.json().get("error", {}).get("message", refresh.text))

params = {
    "theme": st.session_state["theme"],
    "tab": st.session_state["tab"],
    "site": st.session_state.get("selected_sites", []),
    "author": st.session_state.get("selected_authors", []),
}
response = requests.get(f"{API_BASE_URL}/v1/articles", params=params, headers=_headers(), timeout=120)
payload = response.json()
if not response.ok:
    st.error(payload.get("error", {}).get("message", "Failed to load feeds"))
    st.stop()

view = payload["data"]
notice = payload.get("meta", {}).get("notice")

st.radio("Theme", view["themes"], key="theme", horizontal=True, on_change=_reset_selection)
st.caption(f"{view['feeds_count']} Sources • {view['articles_count']} Articles")

main_col, side_col = st.columns([3, 1])

with side_col:
    st.radio("Group by", ["sites", "authors"], key="tab", horizontal=True, on_change=_reset_selection)
    if st.session_state["tab"] == "sites":
        site_counts = {row["site"]: row["count"] for row in view["sites"]}
        st.multiselect(
            "Sites",
            list(site_counts),
            key="selected_sites",
            format_func=lambda site: f"{site} ({site_counts[site]})",
        )
    else:
        author_counts = {row["author"]: row["count"] for row in view["authors"]}
        st.multiselect(
            "Authors",
            list(author_counts),
            key="selected_authors",
            format_func=lambda author: f"{author} ({author_counts[author]})",
        )

with main_col:
    if notice:
        st.warning(notice)
    elif not view["articles"]:
        st.info("No articles found for this theme.")
    for article in view["articles"]:
        with st.container(border=True):
            st.caption(article["feedName"].upper())
            st.markdown(f"### [{article['title']}]({article['link']})")
            snippet = card_snippet(article.get("contentSnippet"), article.get("content"))
            if snippet:
                st.write(snippet)
            byline = _relative(article["pubDate"])
            if article.get("creator"):
                byline += f" · {article['creator']}"
            st.caption(byline)
