# ---------------------------------------------------------
# frontend/app.py
# Property Search - Streamlit frontend
#
# Run: streamlit run frontend/app.py (from repo root)
#
# The page address carries the filter state (?city=Roma,Napoli&contract=...),
# so every search is bookmarkable. Filter state lives in a SearchSession kept
# in st.session_state; the URL is rewritten from it on each change.
# ---------------------------------------------------------

from __future__ import annotations

import pandas as pd
import streamlit as st

try:
    from frontend.config import CATALOG_SOURCE, ENABLE_DEBUG_UI, IS_DEV, PUBLIC_APP_URL
    from frontend.api_client import fetch_catalog_records
    from frontend.url_sync import StreamlitAddressBar
except ModuleNotFoundError:
    from config import CATALOG_SOURCE, ENABLE_DEBUG_UI, IS_DEV, PUBLIC_APP_URL
    from api_client import fetch_catalog_records
    from url_sync import StreamlitAddressBar

if ENABLE_DEBUG_UI:
    try:
        from frontend.dev_observability import (
            clear_debug_history,
            detect_state_changes,
            export_snapshot_json,
            get_cause_tag,
            get_recent_events,
            set_cause_tag,
            track_event,
            track_sync_transitions,
            update_fingerprint,
        )
    except ModuleNotFoundError:
        from dev_observability import (
            clear_debug_history,
            detect_state_changes,
            export_snapshot_json,
            get_cause_tag,
            get_recent_events,
            set_cause_tag,
            track_event,
            track_sync_transitions,
            update_fingerprint,
        )

from backend.catalog import Catalog, CatalogError, load_catalog
from backend.favorites import FavoritesStore, JsonFileStorage
from backend.filter_options import (
    AREA_MAX_OPTIONS,
    AREA_MIN_OPTIONS,
    BATHROOM_OPTIONS,
    BEDROOM_OPTIONS,
    CITY_OPTIONS,
    CONTRACT_TYPE_OPTIONS,
    ENERGY_RATING_OPTIONS,
    LOCATION_OPTIONS,
    PRICE_MAX_OPTIONS,
    PRICE_MIN_OPTIONS,
    PROPERTY_TYPE_OPTIONS,
    ZONE_OPTIONS,
    choice_values,
    option_label,
    option_values,
)
from backend.session import SearchSession
from backend.url_codec import encode
from domains.search.models.filters import SortKey
from domains.search.models.property import Property

st.set_page_config(page_title="Ricerca Immobili", page_icon="🏠", layout="wide")

SORT_LABELS = {
    SortKey.default: "In evidenza",
    SortKey.newest: "Novità",
    SortKey.price_asc: "Prezzo crescente",
    SortKey.price_desc: "Prezzo decrescente",
    SortKey.area_asc: "Superficie crescente",
    SortKey.area_desc: "Superficie decrescente",
    SortKey.bedrooms_asc: "Camere crescenti",
    SortKey.bedrooms_desc: "Camere decrescenti",
}

# Basic filter widgets: (filter key, widget label, options)
BASIC_MULTISELECTS = [
    ("city", "Città", CITY_OPTIONS),
    ("propertyType", "Tipologia", PROPERTY_TYPE_OPTIONS),
    ("contractType", "Contratto", CONTRACT_TYPE_OPTIONS),
    ("bedrooms", "Camere", BEDROOM_OPTIONS),
    ("bathrooms", "Bagni", BATHROOM_OPTIONS),
    ("areaMin", "Superficie minima", AREA_MIN_OPTIONS),
    ("areaMax", "Superficie massima", AREA_MAX_OPTIONS),
    ("location", "Zona turistica", LOCATION_OPTIONS),
]

ADVANCED_FORM_KEY = "advanced_filters_form"


# --------------------------------------------------------------------
# Session helpers
# --------------------------------------------------------------------

def load_frontend_catalog() -> Catalog:
    """Catalog for this browser session, per CATALOG_SOURCE."""
    if CATALOG_SOURCE == "api":
        return Catalog.from_records(fetch_catalog_records())
    return load_catalog()


def init_state() -> None:
    ss = st.session_state

    if "search_session" not in ss:
        try:
            catalog = load_frontend_catalog()
        except CatalogError as e:
            print(f"[CATALOG] {e}")
            st.error("Impossibile caricare il catalogo immobili.")
            catalog = Catalog([])
        favorites = FavoritesStore(JsonFileStorage())
        ss["search_session"] = SearchSession(catalog, favorites, StreamlitAddressBar())
        seed_widget_state(ss["search_session"])


def get_session() -> SearchSession:
    return st.session_state["search_session"]


def seed_widget_state(session: SearchSession) -> None:
    """Initialise widget keys from the session's filters (hydrated or default)."""
    ss = st.session_state
    basic = session.filters.model_dump(by_alias=True)
    ss["w_keyword"] = basic["keyword"]
    for key, _label, _options in BASIC_MULTISELECTS:
        ss[f"w_{key}"] = list(basic[key])
    ss["w_sort_by"] = session.sort_by


def publish_debug_state(session: SearchSession) -> None:
    """Mirror the values the observability fingerprint reads."""
    ss = st.session_state
    ss["_search_query"] = encode(session.filters, session.advanced_filters)
    ss["_search_sort_by"] = session.sort_by.value
    ss["_search_favorites_count"] = len(session.favorites)
    ss["_search_sync_phase"] = session.sync.phase.value


def _cause(tag: str) -> None:
    if ENABLE_DEBUG_UI:
        set_cause_tag(st.session_state, tag)


# --------------------------------------------------------------------
# Widget callbacks (run before the rerun renders)
# --------------------------------------------------------------------

def on_keyword_change() -> None:
    _cause("filter:keyword")
    get_session().update_filter("keyword", st.session_state["w_keyword"])


def on_multiselect_change(key: str) -> None:
    _cause(f"filter:{key}")
    get_session().update_filter(key, st.session_state[f"w_{key}"])


def on_sort_change() -> None:
    _cause("sort")
    get_session().set_sort_by(st.session_state["w_sort_by"])


def on_search_click() -> None:
    _cause("search")
    get_session().search()


def on_toggle_favorite(property_id: str) -> None:
    _cause("favorite")
    get_session().toggle_favorite(property_id)


def on_clear_advanced() -> None:
    _cause("clear_advanced")
    get_session().clear_advanced_filters()


def on_hydrate_from_url() -> None:
    _cause("hydrate_from_url")
    session = get_session()
    session.hydrate_from_url()
    seed_widget_state(session)


# --------------------------------------------------------------------
# Rendering
# --------------------------------------------------------------------


def render_sidebar() -> None:
    session = get_session()

    with st.sidebar:
        st.markdown("## 🔍 Cerca")
        st.text_input("Parola chiave", key="w_keyword", on_change=on_keyword_change,
                      placeholder="villa, Milano, p12…")

        for key, label, options in BASIC_MULTISELECTS:
            st.multiselect(
                label,
                options=option_values(options, st.session_state.get(f"w_{key}", [])),
                format_func=lambda v, opts=options: option_label(opts, v),
                key=f"w_{key}",
                on_change=on_multiselect_change,
                args=(key,),
            )

        render_advanced_filters(session)

        st.selectbox(
            "Ordina per",
            options=list(SortKey),
            format_func=lambda k: SORT_LABELS[k],
            key="w_sort_by",
            on_change=on_sort_change,
        )
        st.button("Cerca", type="primary", on_click=on_search_click, use_container_width=True)


def render_advanced_filters(session: SearchSession) -> None:
    adv = session.advanced_filters
    with st.expander("Filtri avanzati"):
        with st.form(ADVANCED_FORM_KEY):
            price_min_choices = choice_values(PRICE_MIN_OPTIONS, adv.price_min)
            price_min = st.selectbox("Prezzo minimo", price_min_choices,
                                     index=price_min_choices.index(adv.price_min),
                                     format_func=lambda v: option_label(PRICE_MIN_OPTIONS, v) if v else "Qualsiasi")
            price_max_choices = choice_values(PRICE_MAX_OPTIONS, adv.price_max)
            price_max = st.selectbox("Prezzo massimo", price_max_choices,
                                     index=price_max_choices.index(adv.price_max),
                                     format_func=lambda v: option_label(PRICE_MAX_OPTIONS, v) if v else "Qualsiasi")
            property_type = st.multiselect("Tipologia", option_values(PROPERTY_TYPE_OPTIONS, list(adv.property_type)),
                                           default=list(adv.property_type),
                                           format_func=lambda v: option_label(PROPERTY_TYPE_OPTIONS, v))
            location = st.multiselect("Città", option_values(CITY_OPTIONS, list(adv.location)),
                                      default=list(adv.location),
                                      format_func=lambda v: option_label(CITY_OPTIONS, v))
            zones = st.multiselect("Zone", option_values(ZONE_OPTIONS, list(adv.zones)),
                                   default=list(adv.zones),
                                   format_func=lambda v: option_label(ZONE_OPTIONS, v))
            energy = st.multiselect("Classe energetica", option_values(ENERGY_RATING_OPTIONS, list(adv.energy_rating)),
                                    default=list(adv.energy_rating),
                                    format_func=lambda v: option_label(ENERGY_RATING_OPTIONS, v))
            col1, col2 = st.columns(2)
            with col1:
                area = st.text_input("Superficie min (mq)", value=adv.area)
                year_min = st.text_input("Anno da", value=adv.year_min)
            with col2:
                area_max = st.text_input("Superficie max (mq)", value=adv.area_max)
                year_max = st.text_input("Anno a", value=adv.year_max)
            submitted = st.form_submit_button("Applica")

        if submitted:
            _cause("filter:advanced")
            # The panel submits the whole state; untouched fields keep their values
            state = adv.model_dump()
            state.update({
                "price_min": price_min,
                "price_max": price_max,
                "property_type": property_type,
                "location": location,
                "zones": zones,
                "energy_rating": energy,
                "area": area.strip(),
                "area_max": area_max.strip(),
                "year_min": year_min.strip(),
                "year_max": year_max.strip(),
            })
            session.update_advanced_filters(state)
            st.rerun()

        st.button("Cancella filtri avanzati", on_click=on_clear_advanced)


def format_price(prop: Property) -> str:
    if prop.price_hidden:
        return "Prezzo su richiesta"
    return f"€ {prop.price:,.0f}".replace(",", ".")


def render_results() -> None:
    session = get_session()
    results = session.filtered_properties

    st.markdown("## 🏠 Immobili")
    st.caption(f"{len(results)} risultati su {len(session.catalog)} immobili")

    for diag in session.diagnostics:
        st.warning(f"Filtro ignorato: {diag.field} = {diag.value!r} ({diag.reason})")

    with st.expander("🔗 Condividi questa ricerca"):
        st.code(session.share_url(PUBLIC_APP_URL), language=None)
        st.button("Ricarica filtri dall'indirizzo", on_click=on_hydrate_from_url)

    if not results:
        st.info("Nessun immobile corrisponde ai filtri selezionati.")
        return

    tab_list, tab_table, tab_map = st.tabs(["Lista", "Tabella", "Mappa"])

    with tab_list:
        for prop in results:
            render_property_row(session, prop)

    with tab_table:
        df = pd.DataFrame([
            {
                "id": p.id,
                "title": p.title,
                "city": p.city,
                "type": p.property_type,
                "contract": p.contract_type,
                "bedrooms": p.bedrooms,
                "bathrooms": p.bathrooms,
                "area": p.area,
                "price": None if p.price_hidden else p.price,
                "favorite": session.is_favorite(p.id),
            }
            for p in results
        ])
        st.dataframe(
            df,
            use_container_width=True,
            column_config={
                "id": "ID",
                "title": "Titolo",
                "city": "Città",
                "type": "Tipologia",
                "contract": "Contratto",
                "bedrooms": "Camere",
                "bathrooms": "Bagni",
                "area": st.column_config.NumberColumn("Superficie", format="%d mq"),
                "price": st.column_config.NumberColumn("Prezzo", format="€ %.0f"),
                "favorite": st.column_config.CheckboxColumn("Preferito"),
            },
            hide_index=True,
        )

    with tab_map:
        st.map(pd.DataFrame([
            {"lat": p.coordinates.lat, "lon": p.coordinates.lng} for p in results
        ]))


def render_property_row(session: SearchSession, prop: Property) -> None:
    with st.container(border=True):
        col_info, col_fav = st.columns([6, 1])
        with col_info:
            badges = []
            if prop.featured:
                badges.append("⭐ In evidenza")
            if prop.is_new:
                badges.append("🆕 Novità")
            badges.extend(prop.badges)
            st.markdown(f"**{prop.title}**  \n{prop.address} · {prop.city}")
            st.caption(
                f"{prop.property_type} · {prop.contract_type} · {prop.bedrooms} camere · "
                f"{prop.bathrooms} bagni · {prop.area:.0f} mq · {format_price(prop)}"
            )
            if badges:
                st.caption(" · ".join(badges))
        with col_fav:
            icon = "❤️" if session.is_favorite(prop.id) else "🤍"
            st.button(icon, key=f"fav_{prop.id}", on_click=on_toggle_favorite, args=(prop.id,))


def render_debug_panel() -> None:
    ss = st.session_state
    with st.sidebar.expander("🛠 Debug"):
        st.caption(f"Sync phase: {get_session().sync.phase.value}")
        st.caption(f"Recomputations: {get_session().computations}")
        st.json(get_recent_events(ss, limit=15))
        st.download_button("Esporta snapshot", export_snapshot_json(ss), file_name="search_snapshot.json")
        if st.button("Pulisci cronologia"):
            clear_debug_history(ss)


def main() -> None:
    init_state()
    session = get_session()
    ss = st.session_state

    if ENABLE_DEBUG_UI:
        publish_debug_state(session)
        track_sync_transitions(ss, session.sync.transitions)
        changed, old_fp, new_fp = detect_state_changes(ss)
        if changed:
            track_event(ss, "state_changed", {
                "cause": get_cause_tag(ss),
                "old_fp": old_fp,
                "new_fp": new_fp,
            })
            update_fingerprint(ss)

    if IS_DEV:
        print(f"[ROUTING] query={encode(session.filters, session.advanced_filters)!r} "
              f"sort={session.sort_by.value} phase={session.sync.phase.value}")

    render_sidebar()
    render_results()

    if ENABLE_DEBUG_UI:
        render_debug_panel()


if __name__ == "__main__":
    main()
