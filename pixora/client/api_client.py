"""
Async client for the Pixora REST API.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

class ApiError(Exception):
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")

class PixoraClient:
    """Thin wrapper over the REST routes; remembers the token after login"""

    def __init__(
        self,
        base_url: str = "http://localhost:4000",
        api_prefix: str = "/api",
        token: Optional[str] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.api_prefix = api_prefix
        self.token = token
        self.user: Optional[Dict[str, Any]] = None
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=base_url, timeout=10.0)

    async def __aenter__(self) -> "PixoraClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = await self.http.request(method, f"{self.api_prefix}{path}", headers=headers, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.debug(f"{method} {path} failed with {response.status_code}: {detail}")
            raise ApiError(response.status_code, detail)
        return response.json()

    async def _authenticate(self, path: str, username: str, password: str) -> Dict[str, Any]:
        data = await self._request("POST", path, json={"username": username, "password": password})
        self.token = data["token"]
        self.user = data["user"]
        return data

    async def register(self, username: str, password: str) -> Dict[str, Any]:
        return await self._authenticate("/auth/register", username, password)

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        return await self._authenticate("/auth/login", username, password)

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/me")

    async def update_me(self, **fields: Any) -> Dict[str, Any]:
        """Keyword names are the wire names: displayName, bio, avatarUrl"""
        return await self._request("PUT", "/me", json=fields)

    async def list_posts(self, scope: str = "all") -> List[Dict[str, Any]]:
        return await self._request("GET", "/posts", params={"scope": scope})

    async def create_post(self, image_url: str, caption: str) -> Dict[str, Any]:
        return await self._request("POST", "/posts", json={"imageUrl": image_url, "caption": caption})

    async def delete_post(self, post_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/posts/{post_id}")

    async def like(self, post_id: int) -> Dict[str, Any]:
        return await self._request("POST", f"/posts/{post_id}/like")

    async def unlike(self, post_id: int) -> Dict[str, Any]:
        return await self._request("POST", f"/posts/{post_id}/unlike")

    async def add_comment(self, post_id: int, text: str) -> Dict[str, Any]:
        return await self._request("POST", f"/posts/{post_id}/comments", json={"text": text})

    async def delete_comment(self, post_id: int, comment_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/posts/{post_id}/comments/{comment_id}")
