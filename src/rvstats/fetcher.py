from __future__ import annotations

from rvstats import modes
from rvstats.beacon import BeaconClient, ServerReport
from rvstats.models import (
    CompetitiveSettings,
    CooperativeSettings,
    ModeSettings,
    PlayerRecord,
    RotationEntry,
    ServerSnapshot,
    Target,
)


def _settings_for(report: ServerReport) -> ModeSettings:
    if modes.classify(report.current_mode) is modes.GameType.ADVERSARIAL:
        return CompetitiveSettings(
            auto_team_balance=report.auto_team_balance,
            bomb_timer=report.bomb_timer if report.current_mode == modes.BOMB_MODE else 0,
            friendly_fire=report.friendly_fire,
            rounds_per_match=report.rounds_per_match,
            time_per_round=report.time_per_round,
            time_between_rounds=report.time_between_rounds,
        )
    return CooperativeSettings(
        ai_backup=report.ai_backup,
        friendly_fire=report.friendly_fire,
        terrorist_count=report.num_terrorists,
        rotate_map_on_success=report.rotate_map_on_success,
        rounds_per_match=report.rounds_per_match,
        time_per_round=report.time_per_round,
        time_between_rounds=report.time_between_rounds,
    )


def build_snapshot(target: Target, report: ServerReport) -> ServerSnapshot:
    players = [
        PlayerRecord(name=name, kills=kills, time=time)
        for name, kills, time in zip(
            report.player_names, report.player_kills, report.player_times
        )
    ]
    # zip stops at the shorter of the two rotation lists
    maps = [
        RotationEntry(name=name, mode=modes.display_name(mode))
        for name, mode in zip(report.map_rotation, report.mode_rotation)
    ]
    return ServerSnapshot(
        server_name=report.server_name,
        current_players=report.num_players,
        max_players=report.max_players,
        ip_address=target.host,
        port=report.port if report.port is not None else target.port,
        current_map=report.current_map,
        game_mode=modes.display_name(report.current_mode),
        motd=report.motd,
        settings=_settings_for(report),
        players=players,
        maps=maps,
    )


class StatusFetcher:
    def __init__(
        self,
        client: BeaconClient,
        port_offset: int = 1000,
        timeout: float = 5.0,
    ) -> None:
        self.client = client
        self.port_offset = port_offset
        self.timeout = timeout

    async def fetch(self, target: Target) -> ServerSnapshot:
        report = await self.client.get_report(
            target.host, target.port + self.port_offset, self.timeout
        )
        return build_snapshot(target, report)
