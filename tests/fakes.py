"""Test doubles shared across test modules."""

from recipe_relay.utils.exceptions import AuthenticationError, AuthProviderError


class FakeAuthProvider:
    """In-memory identity provider."""

    def __init__(self, id_tokens=None, unavailable=False):
        self.id_tokens = id_tokens or {}
        self.unavailable = unavailable
        self.passwords = {}
        self.verified = set()

    @property
    def provider_name(self) -> str:
        return "fake"

    async def verify_token(self, id_token: str) -> str:
        if id_token not in self.id_tokens:
            raise AuthenticationError("Invalid ID token")
        return self.id_tokens[id_token]

    async def update_password(self, uid: str, new_password: str) -> None:
        if self.unavailable:
            raise AuthProviderError("Provider unavailable")
        self.passwords[uid] = new_password

    async def mark_email_verified(self, uid: str) -> None:
        if self.unavailable:
            raise AuthProviderError("Provider unavailable")
        self.verified.add(uid)


class FakeNotificationService:
    """Records dispatched notifications instead of scheduling delivery."""

    def __init__(self):
        self.dispatched = []

    def dispatch(self, request):
        self.dispatched.append(request)


class RecordingSender:
    """Stands in for ``messaging.send`` and keeps every message it is given."""

    def __init__(self, result="projects/demo/messages/1", error=None):
        self.result = result
        self.error = error
        self.messages = []

    def __call__(self, message):
        self.messages.append(message)
        if self.error is not None:
            raise self.error
        return self.result
