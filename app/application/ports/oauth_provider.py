from typing import Protocol


class OAuthProvider(Protocol):
    name: str

    def exchange_code(self, code: str) -> str:
        """Trade an authorization code for a provider access token."""
        ...
