# storefront/session.py
from .models import ActionResult

# Compared client-side only; this gate is cosmetic and not configurable.
ADMIN_SECRET = "sk234f90"
LOGIN_ERROR = "Invalid Password"

class SessionGuard:
    def __init__(self):
        self.authenticated = False

    def login(self, password: str) -> ActionResult:
        if password == ADMIN_SECRET:
            self.authenticated = True
            return ActionResult(ok=True)
        return ActionResult(ok=False, message=LOGIN_ERROR)

    def logout(self) -> None:
        self.authenticated = False
