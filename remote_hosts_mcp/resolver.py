from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from .config import ResolverConfig
from .errors import AmbiguousSession, ApiError, HostNotFound, SessionNotFound
from .gateway import BackendGateway
from .models import HostRecord, SessionRecord


logger = logging.getLogger("remote_hosts_mcp.resolver")


@dataclass(frozen=True)
class ResolvedSession:
    host: HostRecord
    session: SessionRecord


class SessionResolver:
    """Name-based addressing on top of the backend's id-based API.

    host name -> host record (host_id) -> session list -> session record (session_id).

    Nothing is cached: ids may be reassigned by the backend between calls, so
    every resolution performs the lookups again.
    """

    def __init__(self, gateway: BackendGateway, cfg: ResolverConfig):
        self.gateway = gateway
        self.cfg = cfg

    async def resolve_host(self, host_name: str) -> HostRecord:
        try:
            return await self.gateway.get_host_by_name(host_name)
        except ApiError as e:
            if e.status == 404:
                raise HostNotFound(host_name) from e
            raise

    async def list_sessions(self, host_name: str) -> List[SessionRecord]:
        host = await self.resolve_host(host_name)
        return await self.gateway.list_sessions(host.host_id)

    async def resolve_session(self, host_name: str, session_name: str) -> ResolvedSession:
        host = await self.resolve_host(host_name)
        sessions = await self.gateway.list_sessions(host.host_id)

        matches = [s for s in sessions if s.session_name == session_name]
        if not matches:
            raise SessionNotFound(host_name, session_name)
        if len(matches) > 1:
            if self.cfg.strict_session_names:
                raise AmbiguousSession(host_name, session_name, len(matches))
            logger.warning(
                "duplicate session name %r on host %r, using first of %d",
                session_name, host_name, len(matches),
            )
        return ResolvedSession(host=host, session=matches[0])
