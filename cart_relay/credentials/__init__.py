from .jar import CookieJar
from .cookie import Cookie
from .store import CredentialStore
from .greeting import AccountGreeter, greeting_means_logged_in

__all__ = ["AccountGreeter", "Cookie", "CookieJar", "CredentialStore", "greeting_means_logged_in"]
