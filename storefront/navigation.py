# storefront/navigation.py
from enum import Enum

from .session import SessionGuard

class View(str, Enum):
    HOME = "home"
    CATALOG = "catalog"
    ADMIN_LOGIN = "admin-login"
    ADMIN_DASHBOARD = "admin-dashboard"

class Navigator:
    """
    Holds the one screen currently shown. There is no history and nothing
    survives a restart.
    """

    def __init__(self, session: SessionGuard):
        self.session = session
        self.current = View.HOME

    def home(self) -> View:
        self.current = View.HOME
        return self.current

    def catalog(self) -> View:
        self.current = View.CATALOG
        return self.current

    def admin(self) -> View:
        self.current = View.ADMIN_DASHBOARD if self.session.authenticated else View.ADMIN_LOGIN
        return self.current

    def login_succeeded(self) -> View:
        self.current = View.ADMIN_DASHBOARD
        return self.current

    @property
    def in_admin(self) -> bool:
        return self.current in (View.ADMIN_LOGIN, View.ADMIN_DASHBOARD)
