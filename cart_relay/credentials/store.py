"""Durable cookie persistence so a manual site login survives restarts.

Everything here is best effort: a missing, corrupt or fully expired file means
"start unauthenticated", never an error the caller has to handle.
"""

from __future__ import annotations

import os
import time
import logging
import tempfile
import contextlib
from pathlib import Path
from typing import Any
from collections.abc import Callable, Iterable, Mapping

import orjson

from .jar import CookieJar
from .cookie import Cookie
from .greeting import AccountGreeter, greeting_means_logged_in

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class CredentialStore:
    def __init__(
        self,
        path: Path,
        *,
        domain_filter: str,
        persist_ttl_s: float,
        now_fn: TimeFn | None = None,
    ) -> None:
        self.path = Path(path)
        self._domain_filter = domain_filter
        self._persist_ttl_s = float(persist_ttl_s)
        self._now = now_fn or time.time

    def save(self, tokens: Iterable[Mapping[str, Any]]) -> None:
        """Overwrite the file with the site's cookies, session cookies made persistent."""
        self._write(tokens)

    def load(self) -> list[Cookie]:
        """Return the stored cookies that have not expired yet."""
        if not self.path.exists():
            logger.info("credentials: no saved session at %s", self.path)
            return []

        try:
            raw = orjson.loads(self.path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as exc:
            logger.warning("credentials: saved session at %s is unreadable: %s", self.path, exc)
            return []
        if not isinstance(raw, list):
            logger.warning("credentials: saved session at %s is not a cookie list", self.path)
            return []

        cookies: list[Cookie] = []
        for record in raw:
            if not isinstance(record, dict):
                continue
            try:
                cookies.append(Cookie.from_record(record))
            except ValueError:
                logger.debug("credentials: skipping malformed cookie record", exc_info=True)

        now = self._now()
        valid = [c for c in cookies if not c.is_expired(now)]
        if cookies and not valid:
            logger.info("credentials: all %s saved cookies have expired", len(cookies))
        elif len(valid) < len(cookies):
            logger.info("credentials: skipped %s expired cookies", len(cookies) - len(valid))
        return valid

    async def restore(self, jar: CookieJar) -> int:
        cookies = self.load()
        if not cookies:
            return 0
        try:
            await jar.add_cookies([c.to_record() for c in cookies])
        except Exception:
            logger.exception("credentials: failed to apply saved cookies")
            return 0
        logger.info("credentials: restored %s cookies from %s", len(cookies), self.path)
        return len(cookies)

    async def capture(self, jar: CookieJar) -> bool:
        """Read the live cookies from the browser context and save them."""
        try:
            tokens = await jar.cookies()
        except Exception:
            logger.exception("credentials: could not read cookies from the browser")
            return False
        return self._write(tokens)

    async def is_logged_in(self, greeter: AccountGreeter) -> bool:
        try:
            greeting = await greeter.account_greeting()
        except Exception:
            logger.debug("credentials: account greeting unavailable", exc_info=True)
            return False
        return greeting_means_logged_in(greeting or "")

    def _normalize(self, tokens: Iterable[Mapping[str, Any]]) -> tuple[list[Cookie], int]:
        expires_at = self._now() + self._persist_ttl_s
        out: list[Cookie] = []
        converted = 0
        for record in tokens:
            try:
                cookie = Cookie.from_record(record)
            except ValueError:
                continue
            if not cookie.matches_domain(self._domain_filter):
                continue
            if cookie.is_session:
                converted += 1
            out.append(cookie.persistent(expires_at))
        return out, converted

    def _write(self, tokens: Iterable[Mapping[str, Any]]) -> bool:
        tmp_name: str | None = None
        try:
            cookies, converted = self._normalize(tokens)
            payload = orjson.dumps([c.to_record() for c in cookies], option=orjson.OPT_INDENT_2)

            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Readers never see a half-written file: write aside, then rename over.
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except Exception:
            logger.exception("credentials: failed to save session to %s", self.path)
            return False
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)

        logger.info("credentials: saved %s cookies to %s", len(cookies), self.path)
        if converted:
            logger.info("credentials: converted %s session cookies to persistent", converted)
        return True


__all__ = ["CredentialStore"]
