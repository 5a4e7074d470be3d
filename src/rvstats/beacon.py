"""UDP client for the Raven Shield server beacon.

A server answers the ``REPORT`` datagram on its beacon port with one
latin-1 datagram of ``¶``-separated fields. Each field starts with a
two-character marker followed by a space and the value. List values are
``/``-separated, for example ``¶J1 /Import/Peaks/Training``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

REPORT_REQUEST = b"REPORT"
FIELD_SEPARATOR = "¶"
LIST_SEPARATOR = "/"

MAX_PLAYERS = "A1"
NUM_PLAYERS = "B1"
CURRENT_MAP = "E1"
CURRENT_MODE = "F1"
SERVER_NAME = "I1"
MAP_ROTATION = "J1"
MODE_ROTATION = "K1"
PLAYER_NAMES = "L1"
PLAYER_TIMES = "M1"
PLAYER_KILLS = "O1"
PORT = "P1"
ROUNDS_PER_MATCH = "Q1"
TIME_PER_ROUND = "R1"
TIME_BETWEEN_ROUNDS = "S1"
BOMB_TIMER = "T1"
FRIENDLY_FIRE = "Y1"
AUTO_TEAM_BALANCE = "Z1"
NUM_TERRORISTS = "G2"
AI_BACKUP = "H2"
ROTATE_MAP_ON_SUCCESS = "I2"
MOTD = "L3"


class BeaconError(RuntimeError):
    pass


@dataclass(slots=True)
class ServerReport:
    server_name: str = ""
    num_players: int = 0
    max_players: int = 0
    port: int | None = None
    current_map: str = ""
    current_mode: str = ""
    motd: str = ""
    player_names: list[str] = field(default_factory=list)
    player_kills: list[int] = field(default_factory=list)
    player_times: list[str] = field(default_factory=list)
    map_rotation: list[str] = field(default_factory=list)
    mode_rotation: list[str] = field(default_factory=list)
    auto_team_balance: bool = False
    bomb_timer: int = 0
    friendly_fire: bool = False
    rounds_per_match: int = 0
    time_per_round: int = 0
    time_between_rounds: int = 0
    ai_backup: bool = False
    num_terrorists: int = 0
    rotate_map_on_success: bool = False


def _split_fields(text: str) -> dict[str, str]:
    fields: dict[str, str] = {}
    for chunk in text.split(FIELD_SEPARATOR)[1:]:
        chunk = chunk.rstrip("\x00").strip()
        if len(chunk) < 2:
            continue
        fields[chunk[:2]] = chunk[2:].strip()
    return fields


def _int(fields: dict[str, str], marker: str) -> int:
    raw = fields.get(marker, "")
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError as exc:
        raise BeaconError(f"field {marker} is not an integer: {raw!r}") from exc


def _bool(fields: dict[str, str], marker: str) -> bool:
    return fields.get(marker, "").lower() in {"1", "true"}


def _list(fields: dict[str, str], marker: str) -> list[str]:
    return [v for v in fields.get(marker, "").split(LIST_SEPARATOR) if v]


def parse_report(data: bytes) -> ServerReport:
    fields = _split_fields(data.decode("latin-1"))
    if not fields:
        raise BeaconError("reply carries no report fields")

    try:
        kills = [int(k) for k in _list(fields, PLAYER_KILLS)]
    except ValueError as exc:
        raise BeaconError(f"field {PLAYER_KILLS} has a non-integer entry") from exc

    return ServerReport(
        server_name=fields.get(SERVER_NAME, ""),
        num_players=_int(fields, NUM_PLAYERS),
        max_players=_int(fields, MAX_PLAYERS),
        port=_int(fields, PORT) if fields.get(PORT) else None,
        current_map=fields.get(CURRENT_MAP, ""),
        current_mode=fields.get(CURRENT_MODE, ""),
        motd=fields.get(MOTD, ""),
        player_names=_list(fields, PLAYER_NAMES),
        player_kills=kills,
        player_times=_list(fields, PLAYER_TIMES),
        map_rotation=_list(fields, MAP_ROTATION),
        mode_rotation=_list(fields, MODE_ROTATION),
        auto_team_balance=_bool(fields, AUTO_TEAM_BALANCE),
        bomb_timer=_int(fields, BOMB_TIMER),
        friendly_fire=_bool(fields, FRIENDLY_FIRE),
        rounds_per_match=_int(fields, ROUNDS_PER_MATCH),
        time_per_round=_int(fields, TIME_PER_ROUND),
        time_between_rounds=_int(fields, TIME_BETWEEN_ROUNDS),
        ai_backup=_bool(fields, AI_BACKUP),
        num_terrorists=_int(fields, NUM_TERRORISTS),
        rotate_map_on_success=_bool(fields, ROTATE_MAP_ON_SUCCESS),
    )


class _ReportProtocol(asyncio.DatagramProtocol):
    def __init__(self, reply: asyncio.Future[bytes]) -> None:
        self.reply = reply

    def connection_made(self, transport: asyncio.DatagramTransport) -> None:
        transport.sendto(REPORT_REQUEST)

    def datagram_received(self, data: bytes, addr: tuple[str, int]) -> None:
        if not self.reply.done():
            self.reply.set_result(data)

    def error_received(self, exc: Exception) -> None:
        if not self.reply.done():
            self.reply.set_exception(exc)


class BeaconClient:
    async def get_report(self, host: str, port: int, timeout: float) -> ServerReport:
        loop = asyncio.get_running_loop()
        reply: asyncio.Future[bytes] = loop.create_future()
        transport = None
        try:
            async with asyncio.timeout(timeout):
                transport, _ = await loop.create_datagram_endpoint(
                    lambda: _ReportProtocol(reply),
                    remote_addr=(host, port),
                )
                data = await reply
        except TimeoutError as exc:
            raise BeaconError(f"no beacon reply from {host}:{port} within {timeout}s") from exc
        except (OSError, OverflowError) as exc:
            raise BeaconError(f"beacon query to {host}:{port} failed: {exc}") from exc
        finally:
            if transport is not None:
                transport.close()
        return parse_report(data)
