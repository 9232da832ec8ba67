"""Streamlit dashboard for inboxtally."""

import pandas as pd
import streamlit as st
from dotenv import load_dotenv
from googleapiclient.errors import HttpError

from inboxtally.analytics import build_label_tree, flatten_label_tree
from inboxtally.auth import build_service, get_access_token
from inboxtally.engine import UnreadCountEngine
from inboxtally.fetcher import fetch_label_names

# Load environment variables
load_dotenv()

st.set_page_config(
    page_title="inboxtally - Unread Counts",
    page_icon="📬",
    layout="wide",
)


@st.cache_resource
def get_engine() -> UnreadCountEngine:
    """One engine per server process, scanned once on creation."""
    return UnreadCountEngine()


def _counts_frame(counts: dict[str, int]) -> pd.DataFrame:
    df = pd.DataFrame(
        [{"Label": label_id, "Unread threads": count} for label_id, count in counts.items()],
        columns=["Label", "Unread threads"],
    )
    return df.sort_values("Unread threads", ascending=False, ignore_index=True)


@st.cache_data(ttl=3600)
def get_label_names() -> dict[str, str]:
    """User label names, refreshed hourly."""
    token = get_access_token()
    if not token:
        return {}
    try:
        return fetch_label_names(build_service(token))
    except HttpError as e:
        st.sidebar.warning(f"Failed to fetch label names: {e}")
        return {}


def _folders_frame(user_counts: dict[str, int]) -> pd.DataFrame:
    nodes = flatten_label_tree(build_label_tree(get_label_names(), user_counts, top_n=12))
    return pd.DataFrame(
        [
            {"Folder": "\u2003" * node["depth"] + node["name"], "Unread threads": node["count"]}
            for node in nodes
        ],
        columns=["Folder", "Unread threads"],
    )


def main():
    """Main Streamlit app."""
    engine = get_engine()

    st.sidebar.title("inboxtally")
    st.sidebar.caption("Unread threads per Gmail label")

    if st.sidebar.button("Refresh", key="sidebar_refresh"):
        with st.spinner("Scanning unread mail..."):
            if not engine.refresh():
                st.sidebar.info("A scan is already running")

    snapshot = engine.snapshot()

    if snapshot.error:
        st.sidebar.error(snapshot.error)
    if snapshot.last_updated:
        st.sidebar.caption(f"Last updated: {snapshot.last_updated:%H:%M:%S} UTC")

    st.title("Unread Counts")
    st.caption(f"{engine.settings.lookback_days}-day window")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Inbox", snapshot.system_label_counts.get("INBOX", 0))
    with col2:
        st.metric("Archive", snapshot.archive_count)
    with col3:
        st.metric("Messages scanned", f"{snapshot.scanned_messages:,}")

    st.divider()

    left, right = st.columns(2)
    with left:
        st.subheader("System Labels")
        st.dataframe(_counts_frame(snapshot.system_label_counts), hide_index=True)
    with right:
        st.subheader("User Labels")
        if snapshot.user_label_counts:
            st.dataframe(_counts_frame(snapshot.user_label_counts), hide_index=True)
        else:
            st.info("No unread threads in user labels")

    folders = _folders_frame(snapshot.user_label_counts)
    if not folders.empty:
        st.divider()
        st.subheader("Folders with Unread")
        st.dataframe(folders, hide_index=True)


if __name__ == "__main__":
    main()
