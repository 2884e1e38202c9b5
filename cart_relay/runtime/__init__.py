"""Runtime package.

Keep this module dependency-light: importing `cart_relay.runtime.*` in unit
tests should not require a Playwright browser install.
"""

__all__: list[str] = []
