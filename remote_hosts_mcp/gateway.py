from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .config import BackendConfig
from .errors import ApiError, RequestFailed
from .models import AddHostResult, HostRecord, SessionOutput, SessionRecord


logger = logging.getLogger("remote_hosts_mcp.gateway")


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class BackendGateway:
    """Issues calls against the remote hosts control API.

    One HTTP request per call, no retries. Backend error statuses raise ApiError,
    failures to get any response (connect errors, timeouts) raise RequestFailed.
    """

    def __init__(
        self,
        cfg: BackendConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cfg = cfg
        self._client = httpx.AsyncClient(
            base_url=cfg.api_base,
            timeout=cfg.timeout_s,
            verify=cfg.verify_tls,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(self, method: str, path: str, body: Optional[Dict[str, Any]] = None) -> Any:
        logger.debug("backend %s %s", method, path)
        try:
            response = await self._client.request(method, path, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiError(e.response.status_code, _decode(e.response)) from e
        except httpx.RequestError as e:
            raise RequestFailed(str(e) or type(e).__name__) from e
        return _decode(response)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def add_host(self, payload: Dict[str, Any]) -> AddHostResult:
        data = await self.request("POST", "/hosts/add", payload)
        return AddHostResult.model_validate(data if isinstance(data, dict) else {})

    async def list_hosts(self) -> List[HostRecord]:
        data = await self.request("POST", "/hosts/list", {})
        return [HostRecord.model_validate(h) for h in data or []]

    async def get_host_by_name(self, name: str) -> HostRecord:
        data = await self.request("GET", f"/hosts/by-name/{quote(name, safe='')}")
        return HostRecord.model_validate(data)

    async def list_sessions(self, host_id: Any) -> List[SessionRecord]:
        data = await self.request("POST", f"/hosts/{host_id}/sessions/list", {})
        return [SessionRecord.model_validate(s) for s in data or []]

    async def new_session(self, host_id: Any, session_name: Optional[str] = None) -> SessionRecord:
        body: Dict[str, Any] = {}
        if session_name:
            body["session_name"] = session_name
        data = await self.request("POST", f"/hosts/{host_id}/sessions/new", body)
        return SessionRecord.model_validate(data)

    async def send_input(self, session_id: Any, input_string: str) -> Any:
        return await self.request("POST", f"/sessions/{session_id}/input", {"input": input_string})

    async def read_output(self, session_id: Any) -> SessionOutput:
        data = await self.request("GET", f"/sessions/{session_id}/output")
        return SessionOutput.model_validate(data if isinstance(data, dict) else {})
