#!/usr/bin/env python3
"""
Cursor Usage Menu Bar — macOS status bar app

Sections shown (matching cursor.com/dashboard?tab=usage):
  1. Time periods   → Today / Last 7 Days / Last 30 Days / Billing Period
  2. Billing period → spend by model

The session token is read from Cursor's local database on every refresh,
so there is nothing to configure as long as Cursor is logged in.

Setup:
  pip install .
  python3 cursor_bar.py
"""

import rumps
import logging
import os
import threading
from datetime import datetime

import cursor_usage
from cursor_usage import (
    REFRESH_INTERVALS,
    DEFAULT_REFRESH,
    RefreshOrchestrator,
    UsageDisplayData,
    UsageState,
    format_dollars,
    format_model_name,
    format_tokens,
    spend_level,
)

# ── logging ──────────────────────────────────────────────────────────────────

LOG_FILE = os.path.expanduser("~/.cursor_bar.log")
logging.basicConfig(
    filename=LOG_FILE,
    level=logging.DEBUG,
    format="%(asctime)s %(levelname)s %(message)s",
)
log = logging.getLogger(__name__)

_LEVEL_ICONS = {
    "high":   "🔴",
    "medium": "🟡",
    "low":    "🟢",
    "none":   "⚪",
}


# ── display helpers ───────────────────────────────────────────────────────────

def _mi(title: str) -> rumps.MenuItem:
    """Display-only menu item (non-clickable but visually active)."""
    item = rumps.MenuItem(title)
    item.set_callback(None)
    item._menuitem.setEnabled_(True)
    return item


def _period_line(label: str, dollars: float, reqs: int, tokens: int) -> str:
    icon = _LEVEL_ICONS[spend_level(dollars)]
    return f"{icon}  {label:<15}{format_dollars(dollars):>9}  {reqs} req · {format_tokens(tokens)} tok"


def _menu_items(data: UsageDisplayData | None, error: str | None) -> list:
    items: list = []
    if error:
        items.append(_mi(f"⚠️  {error[:80]}"))
        items.append(None)
    if data is None:
        if not error:
            items.append(_mi("Loading…"))
        return items

    items.append(_mi("Time Period"))
    for p in (*data.periods, data.billing_period):
        items.append(_mi(_period_line(p.label, p.spend_dollars, p.requests, p.tokens)))
    items.append(None)

    items.append(_mi("Billing Period — By Model"))
    if not data.line_items:
        items.append(_mi("  no usage yet"))
    for li in data.line_items:
        items.append(_mi(
            f"  {format_model_name(li.model_name)}  {format_dollars(li.cost_dollars)}"
            f"  ({li.request_count} req · {format_tokens(li.total_tokens)} tok)"
        ))
    items.append(_mi(f"  since {data.billing_period_start[:10]}"))
    return items


# ── app ───────────────────────────────────────────────────────────────────────

class CursorBar(rumps.App):
    def __init__(self):
        super().__init__("$…", quit_button=None)
        self.config = cursor_usage.load_config()
        self._refresh_interval = self.config.get("refresh_interval", DEFAULT_REFRESH)
        self._orchestrator = RefreshOrchestrator.from_config(
            self.config, on_update=self._post_state,
        )

        # Thread-safe UI update queue (background thread → main thread)
        self._ui_pending: tuple[UsageDisplayData | None, str | None] | None = None
        self._ui_lock = threading.Lock()

        self._rebuild_menu(None, None)
        self._timer = rumps.Timer(self._on_timer, self._refresh_interval)
        self._timer.start()
        # Fast ticker: drains pending UI updates on the main thread (avoids AppKit crashes)
        self._ui_ticker = rumps.Timer(self._flush_ui, 0.25)
        self._ui_ticker.start()

        self._schedule_fetch()

    # ── menu ─────────────────────────────────────────────────────────────────

    def _rebuild_menu(self, data: UsageDisplayData | None, error: str | None):
        items = _menu_items(data, error)
        if items:
            items.append(None)

        updated = self._orchestrator.state.updated_at
        if updated:
            items.append(_mi(f"Last updated {updated.strftime('%H:%M:%S')}"))
        items.append(rumps.MenuItem("Refresh Now", callback=self._do_refresh, key="r"))
        items.append(rumps.MenuItem("Open Cursor Dashboard", callback=self._open_dashboard))

        interval_menu = rumps.MenuItem("Refresh Interval")
        for label, secs in REFRESH_INTERVALS.items():
            item = rumps.MenuItem(label, callback=self._make_interval_cb(secs, label))
            item.state = int(secs == self._refresh_interval)
            interval_menu.add(item)
        items.append(interval_menu)

        items.append(None)
        items.append(rumps.MenuItem("Quit", callback=rumps.quit_application, key="q"))

        self.menu.clear()
        self.menu = items
        try:
            ns_menu = self._nsapp.nsstatusitem.menu()
            if ns_menu:
                ns_menu.setAutoenablesItems_(False)
        except Exception:
            pass

    # ── thread-safe UI helpers ────────────────────────────────────────────────

    def _post_state(self, state: UsageState):
        """Queue a full UI update (title + menu) from any thread."""
        snap = state.snapshot()
        with self._ui_lock:
            self._ui_pending = snap

    def _flush_ui(self, _timer):
        """Main-thread ticker: apply any queued updates from background threads."""
        with self._ui_lock:
            pending = self._ui_pending
            self._ui_pending = None
        if pending is not None:
            self._apply(*pending)

    def _apply(self, data: UsageDisplayData | None, error: str | None):
        if error:
            self.title = "Cursor: err"
        elif data is not None:
            self.title = cursor_usage.bar_title(data)
        self._set_tooltip(data, error)
        self._rebuild_menu(data, error)

    def _set_tooltip(self, data: UsageDisplayData | None, error: str | None):
        lines = ["Cursor Usage"]
        if error:
            lines.append(f"Error: {error}")
        if data is not None:
            lines.extend(cursor_usage.summary_lines(data)[:5])
        try:
            self._nsapp.nsstatusitem.button().setToolTip_("\n".join(lines))
        except Exception:
            log.debug("tooltip not available", exc_info=True)

    # ── fetch ─────────────────────────────────────────────────────────────────

    def _on_timer(self, _timer):
        self._schedule_fetch()

    def _schedule_fetch(self):
        threading.Thread(target=self._fetch_and_update, daemon=True).start()

    def _fetch_and_update(self):
        started = datetime.now()
        try:
            if self._orchestrator.refresh():
                log.debug("refresh done in %.1fs", (datetime.now() - started).total_seconds())
        except Exception:
            log.exception("refresh thread failed")

    # ── callbacks ─────────────────────────────────────────────────────────────

    def _do_refresh(self, _sender):
        self._schedule_fetch()

    def _open_dashboard(self, _sender):
        self._orchestrator.open_dashboard()

    def _make_interval_cb(self, secs: int, label: str):
        def cb(_sender):
            self._refresh_interval = secs
            self.config["refresh_interval"] = secs
            cursor_usage.save_config(self.config)
            self._timer.stop()
            self._timer = rumps.Timer(self._on_timer, secs)
            self._timer.start()
            log.info("refresh interval set to %s", label)
            self._rebuild_menu(*self._orchestrator.state.snapshot())
        return cb


def main():
    CursorBar().run()


if __name__ == "__main__":
    main()
