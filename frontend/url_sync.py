# frontend/url_sync.py
# Adapter exposing Streamlit's st.query_params as the sync controller's address bar

from __future__ import annotations

from urllib.parse import urlencode

import streamlit as st

from backend.url_codec import parse_query


class StreamlitAddressBar:
    """
    Address bar backed by st.query_params.

    Streamlit rewrites the browser URL in place when query params change, so
    `replace` never adds a history entry.
    """

    def read(self) -> str:
        return urlencode(st.query_params.to_dict())

    def replace(self, query: str) -> None:
        params = parse_query(query)
        if params:
            st.query_params.from_dict(params)
        else:
            st.query_params.clear()
