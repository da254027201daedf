#!/usr/bin/env python3
"""
Cursor usage core — credential extraction, API client and aggregation.

Reads the Cursor session token straight from Cursor's local state database
(no login needed), pulls billing-period and usage-event data from
cursor.com and folds it into one summary:

  1. Time periods   → Today / Last 7 Days / Last 30 Days / Billing Period
  2. Billing period → per-model breakdown (requests, cost, tokens)

Headless use:
  python3 cursor_usage.py [--json] [--verbose] [--db PATH]
"""

import argparse
import base64
import binascii
import json
import logging
import os
import re
import sqlite3
import subprocess
import sys
import threading
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

from curl_cffi import requests
from curl_cffi.requests.exceptions import RequestException as CurlRequestException

log = logging.getLogger(__name__)

# ── config ────────────────────────────────────────────────────────────────────

CONFIG_FILE = os.path.expanduser("~/.cursor_bar_config.json")

REFRESH_INTERVALS = {
    "1 min":  60,
    "5 min":  300,
    "15 min": 900,
}
DEFAULT_REFRESH = 60
DEFAULT_TIMEOUT = 15   # seconds per HTTP call; a timeout is a NetworkError


def load_config() -> dict:
    if os.path.exists(CONFIG_FILE):
        try:
            with open(CONFIG_FILE) as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            corrupt = CONFIG_FILE + ".bak"
            log.warning("Config file corrupt (%s), resetting. Backup at %s", e, corrupt)
            try:
                os.replace(CONFIG_FILE, corrupt)
            except OSError:
                pass
    return {}


def save_config(cfg: dict):
    tmp = CONFIG_FILE + ".tmp"
    with open(tmp, "w") as f:
        json.dump(cfg, f, indent=2)
    os.replace(tmp, CONFIG_FILE)


# ── errors ────────────────────────────────────────────────────────────────────

class CursorBarError(Exception):
    """Base class for every failure that ends a refresh cycle."""


class CredentialError(CursorBarError):
    pass


class DatabaseNotFound(CredentialError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cursor database not found at: {path}")


class CannotOpen(CredentialError):
    def __init__(self, msg: str):
        super().__init__(f"Cannot open database: {msg}")


class QueryFailed(CredentialError):
    def __init__(self, msg: str):
        super().__init__(f"Query failed: {msg}")


class TokenNotFound(CredentialError):
    def __init__(self):
        super().__init__("No auth token found in Cursor database. Are you logged in?")


class InvalidJwt(CredentialError):
    def __init__(self):
        super().__init__("Auth token is not a valid JWT")


class MissingSubClaim(CredentialError):
    def __init__(self):
        super().__init__("JWT missing 'sub' claim")


class NetworkError(CursorBarError):
    pass


class HttpStatusError(NetworkError):
    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body or 'no body'}")


class TransportError(NetworkError):
    pass


# ── data models ───────────────────────────────────────────────────────────────

def _int_field(obj: dict, key: str) -> int:
    val = obj.get(key)
    if val is None:
        return 0
    try:
        return int(val)
    except (TypeError, ValueError):
        log.debug("ignoring non-integer %s=%r", key, val)
        return 0


def _str_field(obj: dict, key: str) -> str | None:
    val = obj.get(key)
    return val if isinstance(val, str) else None


@dataclass(frozen=True)
class TokenInfo:
    session_token: str
    user_id: str


@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0
    cache_write_tokens: int = 0
    cache_read_tokens: int = 0
    total_cents: float = 0.0

    @property
    def total_tokens(self) -> int:
        return (self.input_tokens + self.output_tokens
                + self.cache_write_tokens + self.cache_read_tokens)

    @classmethod
    def from_dict(cls, obj: dict) -> "TokenUsage":
        cents = obj.get("totalCents")
        try:
            total_cents = float(cents) if cents is not None else 0.0
        except (TypeError, ValueError):
            total_cents = 0.0
        return cls(
            input_tokens=_int_field(obj, "inputTokens"),
            output_tokens=_int_field(obj, "outputTokens"),
            cache_write_tokens=_int_field(obj, "cacheWriteTokens"),
            cache_read_tokens=_int_field(obj, "cacheReadTokens"),
            total_cents=total_cents,
        )


@dataclass
class UsageEvent:
    """One billable action from get-filtered-usage-events."""
    timestamp: str                     # epoch milliseconds, string-encoded
    model: str | None = None
    token_usage: TokenUsage | None = None
    kind: str | None = None
    usage_based_costs: str | None = None
    is_token_based_call: bool | None = None
    is_chargeable: bool | None = None

    @property
    def cost_cents(self) -> float:
        return self.token_usage.total_cents if self.token_usage else 0.0

    @property
    def cost_dollars(self) -> float:
        return self.cost_cents / 100

    @property
    def total_tokens(self) -> int:
        return self.token_usage.total_tokens if self.token_usage else 0

    @classmethod
    def from_dict(cls, obj: dict) -> "UsageEvent":
        tu = obj.get("tokenUsage")
        return cls(
            timestamp=str(obj.get("timestamp", "")),
            model=_str_field(obj, "model"),
            token_usage=TokenUsage.from_dict(tu) if isinstance(tu, dict) else None,
            kind=_str_field(obj, "kind"),
            usage_based_costs=_str_field(obj, "usageBasedCosts"),
            is_token_based_call=obj.get("isTokenBasedCall"),
            is_chargeable=obj.get("isChargeable"),
        )


@dataclass(frozen=True)
class LineItem:
    model_name: str
    request_count: int
    cost_dollars: float
    total_tokens: int


@dataclass(frozen=True)
class PeriodSummary:
    label: str
    requests: int
    spend_dollars: float
    tokens: int


_CAMEL_RE = re.compile(r"_([a-z0-9])")


def _camel(key: str) -> str:
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), key)


def _camel_keys(obj):
    if isinstance(obj, dict):
        return {_camel(k): _camel_keys(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_camel_keys(v) for v in obj]
    return obj


@dataclass(frozen=True)
class UsageDisplayData:
    total_requests: int
    total_spend_dollars: float
    total_tokens: int
    line_items: tuple[LineItem, ...]
    billing_period_start: str          # RFC 3339
    today: PeriodSummary
    last_7_days: PeriodSummary
    last_30_days: PeriodSummary

    @property
    def periods(self) -> tuple[PeriodSummary, ...]:
        return (self.today, self.last_7_days, self.last_30_days)

    @property
    def billing_period(self) -> PeriodSummary:
        return PeriodSummary(
            "Billing Period", self.total_requests,
            self.total_spend_dollars, self.total_tokens,
        )

    def to_dict(self) -> dict:
        """camelCase dict, e.g. for `cursor-usage --json`."""
        return _camel_keys(asdict(self))


# ── token extraction ──────────────────────────────────────────────────────────

DB_RELATIVE_PATH = os.path.join("Cursor", "User", "globalStorage", "state.vscdb")
TOKEN_KEY = "cursorAuth/accessToken"
_TOKEN_QUERY = "SELECT value FROM ItemTable WHERE key = ?"


def database_path(platform: str | None = None) -> str:
    """Cursor's state.vscdb for the given (or current) platform."""
    platform = platform or sys.platform
    if platform == "darwin":
        base = os.path.expanduser("~/Library/Application Support")
    elif platform.startswith("win"):
        base = os.environ.get("APPDATA") or os.path.expanduser("~/AppData/Roaming")
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or os.path.expanduser("~/.config")
    return os.path.join(base, DB_RELATIVE_PATH)


def _read_access_token(db_path: str) -> str:
    uri = Path(db_path).resolve().as_uri() + "?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as e:
        raise CannotOpen(str(e)) from e
    try:
        try:
            row = conn.execute(_TOKEN_QUERY, (TOKEN_KEY,)).fetchone()
        except sqlite3.Error as e:
            raise QueryFailed(str(e)) from e
    finally:
        conn.close()

    if row is None or row[0] is None:
        raise TokenNotFound()
    value = row[0]
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise QueryFailed(f"token value is not UTF-8: {e}") from e
    return str(value).strip()


def _b64url_decode(segment: str) -> bytes:
    # JWT segments are base64url without padding
    padded = segment + "=" * (-len(segment) % 4)
    return base64.b64decode(padded, altchars=b"-_", validate=True)


def user_id_from_jwt(jwt: str) -> str:
    """Decode the JWT payload (unverified) and return the account id from `sub`.

    `sub` looks like "auth0|<userId>"; without a pipe the whole claim is used.
    """
    parts = jwt.split(".")
    if len(parts) < 2:
        raise InvalidJwt()
    try:
        payload = json.loads(_b64url_decode(parts[1]))
    except (binascii.Error, ValueError) as e:
        raise InvalidJwt() from e

    sub = payload.get("sub") if isinstance(payload, dict) else None
    if not isinstance(sub, str):
        raise MissingSubClaim()
    if "|" in sub:
        return sub.split("|")[1]
    return sub


def session_cookie_value(user_id: str, jwt: str) -> str:
    """WorkosCursorSessionToken value: "<userId>::<jwt>", already URL-escaped."""
    return f"{user_id}%3A%3A{jwt}"


def extract_token(db_path: str | None = None) -> TokenInfo:
    """Read the access token from Cursor's local DB and build the session cookie."""
    db_path = db_path or database_path()
    if not os.path.exists(db_path):
        raise DatabaseNotFound(db_path)

    jwt = _read_access_token(db_path)
    user_id = user_id_from_jwt(jwt)
    log.debug("token extracted from %s for user %s", db_path, user_id)
    return TokenInfo(session_cookie_value(user_id, jwt), user_id)


# ── cursor.com API ────────────────────────────────────────────────────────────

USAGE_URL = "https://cursor.com/api/usage"
EVENTS_URL = "https://cursor.com/api/dashboard/get-filtered-usage-events"
DASHBOARD_URL = "https://cursor.com/dashboard?tab=usage"
SESSION_COOKIE = "WorkosCursorSessionToken"
EVENTS_PAGE_SIZE = 1000

_IMPERSONATE = "chrome"
_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
# The events endpoint only accepts what looks like a same-origin dashboard call.
EVENTS_HEADERS = {
    "Content-Type": "application/json",
    "Origin": "https://cursor.com",
    "Referer": DASHBOARD_URL,
    "Sec-Fetch-Site": "same-origin",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Dest": "empty",
    "Accept": "*/*",
    "Accept-Language": "en",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "User-Agent": _USER_AGENT,
}

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_rfc3339(value: str) -> datetime | None:
    if not _RFC3339_RE.match(value):
        return None
    s = value[:10] + "T" + value[11:]
    if s[-1] in "Zz":
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s).astimezone(timezone.utc)
    except ValueError:
        return None


def _parse_iso_fractional_z(value: str) -> datetime | None:
    try:
        dt = datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ")
    except ValueError:
        return None
    return dt.replace(tzinfo=timezone.utc)


# Tried in order; first success wins.
BILLING_START_PARSERS: tuple[Callable[[str], datetime | None], ...] = (
    _parse_rfc3339,
    _parse_iso_fractional_z,
)


def month_start_fallback(now: datetime | None = None) -> datetime:
    """Midnight on the 1st of the current local month, wall clock taken as UTC."""
    local = (now or datetime.now(timezone.utc)).astimezone()
    return datetime(local.year, local.month, 1, tzinfo=timezone.utc)


def parse_billing_start(value, now: datetime | None = None) -> datetime:
    if isinstance(value, str):
        for parser in BILLING_START_PARSERS:
            dt = parser(value)
            if dt is not None:
                return dt
        log.debug("unparsable startOfMonth %r, using month start", value)
    return month_start_fallback(now)


def _epoch_ms(dt: datetime) -> str:
    return str(int(dt.timestamp() * 1000))


class CursorApi:
    """Authenticated client for the two cursor.com usage endpoints."""

    def __init__(self, session_token: str, user_id: str, timeout: float = DEFAULT_TIMEOUT):
        self.session_token = session_token
        self.user_id = user_id
        self.timeout = timeout

    def _send(self, method: str, url: str, **kwargs):
        fn = requests.get if method == "GET" else requests.post
        try:
            r = fn(
                url, cookies={SESSION_COOKIE: self.session_token},
                timeout=self.timeout, impersonate=_IMPERSONATE, **kwargs,
            )
        except CurlRequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        log.debug("%s %s  status=%s  body=%s", method, url, r.status_code, r.text[:800])
        if not 200 <= r.status_code < 300:
            raise HttpStatusError(r.status_code, r.text)
        try:
            return r.json()
        except ValueError as e:
            raise TransportError(f"{method} {url} returned invalid JSON: {e}") from e

    def fetch_billing_period_start(self, now: datetime | None = None) -> datetime:
        """Billing cycle anchor from the legacy /api/usage endpoint.

        The response has dynamic per-model keys; only `startOfMonth` is read.
        """
        data = self._send("GET", USAGE_URL, params={"user": self.user_id})
        start = data.get("startOfMonth") if isinstance(data, dict) else None
        return parse_billing_start(start, now)

    def fetch_usage_events(self, start: datetime, end: datetime) -> list[UsageEvent]:
        # Only page 1 is requested; periods with >1000 events under-report.
        body = {
            "teamId": 0,
            "startDate": _epoch_ms(start),
            "endDate": _epoch_ms(end),
            "page": 1,
            "pageSize": EVENTS_PAGE_SIZE,
        }
        data = self._send("POST", EVENTS_URL, headers=EVENTS_HEADERS, data=json.dumps(body))
        events = data.get("usageEventsDisplay") if isinstance(data, dict) else None
        return [UsageEvent.from_dict(e) for e in (events or []) if isinstance(e, dict)]

    def fetch_display_data(self, now: datetime | None = None) -> UsageDisplayData:
        now = now or datetime.now(timezone.utc)
        billing_start = self.fetch_billing_period_start(now)
        fetch_start = min(billing_start, now - timedelta(days=30))
        events = self.fetch_usage_events(fetch_start, now)
        log.debug("fetched %d events since %s", len(events), fetch_start.isoformat())
        return aggregate(billing_start, events, now)


# ── aggregation ───────────────────────────────────────────────────────────────

def start_of_local_day(now: datetime) -> datetime:
    """Local midnight of `now`'s day, as an absolute (UTC) instant."""
    local = now.astimezone()
    midnight = local.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight.astimezone(timezone.utc)


def event_time(event: UsageEvent) -> datetime:
    """Event instant; a malformed timestamp maps to the Unix epoch."""
    try:
        ms = float(event.timestamp)
        return datetime.fromtimestamp(int(ms) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        log.debug("bad event timestamp %r", event.timestamp)
        return EPOCH


class _Bucket:
    __slots__ = ("requests", "cents", "tokens")

    def __init__(self):
        self.requests = 0
        self.cents = 0.0
        self.tokens = 0

    def add(self, cents: float, tokens: int):
        self.requests += 1
        self.cents += cents
        self.tokens += tokens

    def summary(self, label: str) -> PeriodSummary:
        return PeriodSummary(label, self.requests, self.cents / 100, self.tokens)


def aggregate(billing_start: datetime, events, now: datetime | None = None) -> UsageDisplayData:
    """Fold usage events into billing-period totals plus three trailing windows.

    Windows overlap: one event may count in every bucket. All bounds are
    inclusive. Line items keep first-seen order on equal cost.
    """
    now = now or datetime.now(timezone.utc)
    thirty_days_ago = now - timedelta(days=30)
    seven_days_ago = now - timedelta(days=7)
    start_of_today = start_of_local_day(now)

    by_model: dict[str, _Bucket] = {}
    billing = _Bucket()
    today, week, month = _Bucket(), _Bucket(), _Bucket()

    for event in events:
        ts = event_time(event)
        cents = event.cost_cents
        tokens = event.total_tokens

        if ts >= billing_start:
            billing.add(cents, tokens)
            model = event.model if event.model is not None else "unknown"
            by_model.setdefault(model, _Bucket()).add(cents, tokens)
        if ts >= start_of_today:
            today.add(cents, tokens)
        if ts >= seven_days_ago:
            week.add(cents, tokens)
        if ts >= thirty_days_ago:
            month.add(cents, tokens)

    line_items = sorted(
        (LineItem(model, b.requests, b.cents / 100, b.tokens) for model, b in by_model.items()),
        key=lambda item: item.cost_dollars,
        reverse=True,
    )

    return UsageDisplayData(
        total_requests=sum(item.request_count for item in line_items),
        total_spend_dollars=billing.cents / 100,
        total_tokens=billing.tokens,
        line_items=tuple(line_items),
        billing_period_start=billing_start.isoformat(),
        today=today.summary("Today"),
        last_7_days=week.summary("Last 7 Days"),
        last_30_days=month.summary("Last 30 Days"),
    )


# ── shared state + refresh ────────────────────────────────────────────────────

class UsageState:
    """Current snapshot or error, replaced wholesale under a lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self._data: UsageDisplayData | None = None
        self._error: str | None = None
        self._updated_at: datetime | None = None

    def publish_data(self, data: UsageDisplayData):
        with self._lock:
            self._data = data
            self._error = None
            self._updated_at = datetime.now()

    def publish_error(self, error: str, clear_data: bool = False):
        with self._lock:
            self._error = error
            if clear_data:
                self._data = None

    def snapshot(self) -> tuple[UsageDisplayData | None, str | None]:
        with self._lock:
            return self._data, self._error

    @property
    def updated_at(self) -> datetime | None:
        with self._lock:
            return self._updated_at

    @property
    def data(self) -> UsageDisplayData | None:
        return self.snapshot()[0]

    @property
    def error(self) -> str | None:
        return self.snapshot()[1]


def open_dashboard(platform: str | None = None):
    platform = platform or sys.platform
    if platform == "darwin":
        subprocess.Popen(["open", DASHBOARD_URL])
    elif platform.startswith("win"):
        os.startfile(DASHBOARD_URL)
    else:
        subprocess.Popen(["xdg-open", DASHBOARD_URL])


class RefreshOrchestrator:
    """Runs refresh cycles: extract credential → fetch → aggregate → publish.

    Only one cycle runs at a time; a trigger that races an in-flight cycle
    is dropped. The state lock is never held across network calls.
    """

    def __init__(self, state: UsageState | None = None,
                 extractor: Callable[[], TokenInfo] = extract_token,
                 api_factory: Callable[[TokenInfo], CursorApi] | None = None,
                 on_update: Callable[[UsageState], None] | None = None):
        self.state = state or UsageState()
        self._extract = extractor
        self._api_factory = api_factory or (lambda info: CursorApi(info.session_token, info.user_id))
        self._on_update = on_update
        self._inflight = threading.Lock()

    @classmethod
    def from_config(cls, cfg: dict, **kwargs) -> "RefreshOrchestrator":
        db_path = cfg.get("database_path")
        timeout = cfg.get("request_timeout", DEFAULT_TIMEOUT)
        return cls(
            extractor=lambda: extract_token(db_path),
            api_factory=lambda info: CursorApi(info.session_token, info.user_id, timeout),
            **kwargs,
        )

    # ── command surface ──

    def get_usage_data(self) -> UsageDisplayData | None:
        return self.state.data

    def get_error(self) -> str | None:
        return self.state.error

    def open_dashboard(self):
        open_dashboard()

    def refresh(self) -> bool:
        """Run one cycle. Returns False if another cycle was already running."""
        if not self._inflight.acquire(blocking=False):
            log.debug("refresh already in flight, skipping")
            return False
        try:
            self._cycle()
        finally:
            self._inflight.release()
        if self._on_update:
            self._on_update(self.state)
        return True

    def _cycle(self):
        # Token may have rotated since the last cycle; never reuse it.
        try:
            info = self._extract()
        except CredentialError as e:
            log.error("token extraction failed: %s", e)
            self.state.publish_error(f"Token error: {e}", clear_data=True)
            return

        try:
            data = self._api_factory(info).fetch_display_data()
        except NetworkError as e:
            log.error("API error: %s", e)
            self.state.publish_error(f"API error: {e}")
            return
        except Exception as e:
            log.exception("refresh failed")
            self.state.publish_error(f"Unexpected error: {e}")
            return

        log.debug("usage: %d requests, $%.2f this period",
                  data.total_requests, data.total_spend_dollars)
        self.state.publish_data(data)


# ── display helpers ───────────────────────────────────────────────────────────

def format_model_name(name: str) -> str:
    return name.replace("-high-thinking", " (thinking)").replace("-preview", "")


def format_dollars(dollars: float) -> str:
    return f"${dollars:.2f}"


def format_tokens(n: int) -> str:
    """Compact token count: 999 → '999', 1234 → '1.2k', 3_400_000 → '3.4M'."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1000:
        return f"{n / 1000:.1f}k"
    return str(n)


def spend_level(dollars: float) -> str:
    if dollars >= 50:
        return "high"
    if dollars >= 10:
        return "medium"
    if dollars > 0:
        return "low"
    return "none"


def bar_title(data: UsageDisplayData) -> str:
    return (f"Today: {format_dollars(data.today.spend_dollars)} | "
            f"Period: {format_dollars(data.total_spend_dollars)}")


def _pad(s: str, width: int) -> str:
    return s[:width].ljust(width)


def summary_lines(data: UsageDisplayData) -> list[str]:
    lines = [f"{_pad('Time Period', 15)}{'Spend':>9}  {'Reqs':>6}  {'Tokens':>7}"]
    for p in (*data.periods, data.billing_period):
        lines.append(
            f"{_pad(p.label, 15)}{format_dollars(p.spend_dollars):>9}  "
            f"{p.requests:>6}  {format_tokens(p.tokens):>7}"
        )
    lines.append("")
    lines.append(f"Billing Period — By Model (since {data.billing_period_start[:10]})")
    if not data.line_items:
        lines.append("  no usage yet")
    for item in data.line_items:
        lines.append(
            f"  {_pad(format_model_name(item.model_name), 28)}"
            f"{format_dollars(item.cost_dollars):>9}  {item.request_count:>5} req  "
            f"{format_tokens(item.total_tokens):>7}"
        )
    return lines


# ── cli ───────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Show Cursor usage for the current billing period.")
    parser.add_argument("--json", action="store_true", help="print the summary as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging to stderr")
    parser.add_argument("--db", help="path to Cursor's state.vscdb")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    cfg = load_config()
    if args.db:
        cfg["database_path"] = args.db

    orch = RefreshOrchestrator.from_config(cfg)
    orch.refresh()
    data, error = orch.state.snapshot()
    if error or data is None:
        print(error or "No usage data", file=sys.stderr)
        return 1
    if args.json:
        print(json.dumps(data.to_dict(), indent=2))
    else:
        print("\n".join(summary_lines(data)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
