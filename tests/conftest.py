from rvstats.models import CompetitiveSettings, ServerSnapshot


def make_snapshot(
    host: str = "10.0.0.1",
    port: int = 7777,
    players: int = 2,
    name: str = "Alpha",
) -> ServerSnapshot:
    return ServerSnapshot(
        server_name=name,
        current_players=players,
        max_players=16,
        ip_address=host,
        port=port,
        current_map="Training",
        game_mode="Bomb",
        motd="",
        settings=CompetitiveSettings(bomb_timer=45),
    )
