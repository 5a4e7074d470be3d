from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class Target:
    host: str
    port: int


@dataclass(slots=True)
class PlayerRecord:
    name: str
    kills: int
    time: str


@dataclass(slots=True)
class RotationEntry:
    name: str
    mode: str


@dataclass(slots=True)
class CompetitiveSettings:
    auto_team_balance: bool = False
    # Only meaningful for the bomb mode.
    bomb_timer: int = 0
    friendly_fire: bool = False
    rounds_per_match: int = 0
    time_per_round: int = 0
    time_between_rounds: int = 0


@dataclass(slots=True)
class CooperativeSettings:
    ai_backup: bool = False
    friendly_fire: bool = False
    terrorist_count: int = 0
    rotate_map_on_success: bool = False
    rounds_per_match: int = 0
    time_per_round: int = 0
    time_between_rounds: int = 0


ModeSettings = CompetitiveSettings | CooperativeSettings


@dataclass(slots=True)
class ServerSnapshot:
    server_name: str
    current_players: int
    max_players: int
    ip_address: str
    port: int
    current_map: str
    game_mode: str
    motd: str
    settings: ModeSettings
    players: list[PlayerRecord] = field(default_factory=list)
    maps: list[RotationEntry] = field(default_factory=list)

    @property
    def key(self) -> tuple[str, int]:
        return (self.ip_address, self.port)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with both settings keys present; the inactive one is zeroed."""
        pvp = self.settings if isinstance(self.settings, CompetitiveSettings) else CompetitiveSettings()
        coop = self.settings if isinstance(self.settings, CooperativeSettings) else CooperativeSettings()
        return {
            "server_name": self.server_name,
            "current_players": self.current_players,
            "max_players": self.max_players,
            "ip_address": self.ip_address,
            "port": self.port,
            "current_map": self.current_map,
            "game_mode": self.game_mode,
            "motd": self.motd,
            "players": [asdict(p) for p in self.players],
            "maps": [asdict(m) for m in self.maps],
            "pvp_settings": asdict(pvp),
            "coop_settings": asdict(coop),
        }
