from urllib.parse import urlencode


class InviteLinkBuilder:
    """Builds the shareable URL, the only place a raw token leaves memory"""

    def __init__(self, base_url: str, accept_path: str = "/aceitar"):
        self.base_url = base_url.rstrip("/")
        self.accept_path = "/" + accept_path.lstrip("/")

    def build(self, invite_id: str, token: str) -> str:
        query = urlencode({"inviteId": invite_id, "token": token})
        return f"{self.base_url}{self.accept_path}?{query}"
