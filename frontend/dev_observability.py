# frontend/dev_observability.py
# DEV-only observability for the search session in Streamlit
# (filter-state fingerprints, sync transitions, event timeline)

from __future__ import annotations

import hashlib
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

MAX_EVENTS = 100


def now_iso() -> str:
    """Return current timestamp in ISO format."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def compute_state_fingerprint(session_state: dict) -> str:
    """
    Compute a stable fingerprint of the search state for change detection.

    Includes:
    - encoded filter query (the URL projection of both filter records)
    - sort key
    - number of favorites
    - sync phase

    Returns:
        Short hash string (first 12 chars of SHA256)
    """
    fingerprint_data = {
        "query": session_state.get("_search_query"),
        "sort_by": session_state.get("_search_sort_by"),
        "favorites": session_state.get("_search_favorites_count"),
        "sync_phase": session_state.get("_search_sync_phase"),
    }
    json_str = json.dumps(fingerprint_data, sort_keys=True, default=str)
    return hashlib.sha256(json_str.encode()).hexdigest()[:12]


def detect_state_changes(session_state: dict) -> Tuple[bool, Optional[str], Optional[str]]:
    """
    Detect if the search state has changed since last check.

    Returns:
        (changed, old_fingerprint, new_fingerprint)
        - changed: True if state changed
        - old_fingerprint: Previous fingerprint (or None if first run)
        - new_fingerprint: Current fingerprint
    """
    new_fingerprint = compute_state_fingerprint(session_state)
    old_fingerprint = session_state.get("_debug_last_fingerprint")

    if old_fingerprint is None:
        return True, None, new_fingerprint

    return new_fingerprint != old_fingerprint, old_fingerprint, new_fingerprint


def update_fingerprint(session_state: dict) -> None:
    """Store the current fingerprint after logging a change."""
    session_state["_debug_last_fingerprint"] = compute_state_fingerprint(session_state)
    session_state["_debug_last_change_time"] = now_iso()


def set_cause_tag(session_state: dict, cause: str) -> None:
    """
    Set a cause tag before a state-changing action (e.g. "filter:city",
    "sort", "favorite"). Consumed by the next get_cause_tag call.
    """
    session_state["_debug_cause"] = cause


def get_cause_tag(session_state: dict, default: str = "rerun") -> str:
    """Get and clear the cause tag for this state change."""
    return session_state.pop("_debug_cause", default)


def track_event(session_state: dict, event_name: str, details: Optional[Dict[str, Any]] = None) -> None:
    """
    Append an event to the session event timeline.

    Args:
        session_state: Streamlit session_state dict
        event_name: Short descriptive name (e.g., "state_changed", "sync_transition")
        details: Optional dict of additional context
    """
    if "_dev_events" not in session_state:
        session_state["_dev_events"] = []

    event: Dict[str, Any] = {
        "ts": now_iso(),
        "name": event_name,
    }
    if details:
        event["details"] = dict(details)

    session_state["_dev_events"].append(event)

    # Keep only the last MAX_EVENTS events
    if len(session_state["_dev_events"]) > MAX_EVENTS:
        session_state["_dev_events"] = session_state["_dev_events"][-MAX_EVENTS:]


def track_sync_transitions(session_state: dict, transitions: List[Tuple[Any, Any, str]]) -> int:
    """
    Record sync controller transitions not yet seen in the timeline.

    Returns:
        Number of new transitions recorded
    """
    seen = session_state.get("_debug_sync_seen", 0)
    new = transitions[seen:]
    for source, target, cause in new:
        track_event(session_state, "sync_transition", {
            "from": getattr(source, "value", source),
            "to": getattr(target, "value", target),
            "cause": cause,
        })
    session_state["_debug_sync_seen"] = len(transitions)
    return len(new)


def get_recent_events(session_state: dict, limit: int = 30) -> List[Dict[str, Any]]:
    """
    Get the most recent events from the timeline.

    Returns:
        List of event dicts (most recent first)
    """
    events = session_state.get("_dev_events", [])
    return list(reversed(events[-limit:]))


def clear_debug_history(session_state: dict) -> None:
    """Clear the event timeline without affecting app state."""
    if "_dev_events" in session_state:
        session_state["_dev_events"] = []


def export_snapshot_json(session_state: dict) -> str:
    """
    Export a diagnostic snapshot as formatted JSON string.

    Returns:
        JSON string with the fingerprinted state and recent events
    """
    changed, old_fp, new_fp = detect_state_changes(session_state)
    export = {
        "timestamp": now_iso(),
        "state": {
            "query": session_state.get("_search_query"),
            "sort_by": session_state.get("_search_sort_by"),
            "favorites": session_state.get("_search_favorites_count"),
            "sync_phase": session_state.get("_search_sync_phase"),
        },
        "recent_events": get_recent_events(session_state, limit=50),
        "change_detection": {
            "changed_since_last": changed,
            "old_fingerprint": old_fp,
            "new_fingerprint": new_fp,
            "last_change_time": session_state.get("_debug_last_change_time"),
            "pending_cause": session_state.get("_debug_cause", "none"),
        },
    }
    return json.dumps(export, indent=2)
