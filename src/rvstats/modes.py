from __future__ import annotations

from enum import StrEnum

BOMB_MODE = "RGM_BombAdvMode"


class GameType(StrEnum):
    ADVERSARIAL = "adv"
    COOPERATIVE = "coop"


FRIENDLY_GAME_MODES: dict[str, str] = {
    "RGM_BombAdvMode": "Bomb",
    "RGM_DeathmatchMode": "Survival",
    "RGM_EscortAdvMode": "Escort the Pilot",
    "RGM_HostageRescueAdvMode": "Hostage",
    "RGM_HostageRescueCoopMode": "Hostage Rescue",
    "RGM_MissionMode": "Mission",
    "RGM_TeamDeathmatchMode": "Team Survival",
    "RGM_TerroristHuntCoopMode": "Terrorist Hunt",
    "RGM_TerroristHuntAdvMode": "Terrorist Hunt (Adversarial)",
    "RGM_ScatteredHuntAdvMode": "Scattered Hunt",
    "RGM_CaptureTheEnemyAdvMode": "Capture the Enemy",
    "RGM_CountDownMode": "Countdown",
    "RGM_KamikazeMode": "Kamikaze",
}

GAME_TYPES: dict[str, GameType] = {
    "RGM_BombAdvMode": GameType.ADVERSARIAL,
    "RGM_DeathmatchMode": GameType.ADVERSARIAL,
    "RGM_EscortAdvMode": GameType.ADVERSARIAL,
    "RGM_HostageRescueAdvMode": GameType.ADVERSARIAL,
    "RGM_TeamDeathmatchMode": GameType.ADVERSARIAL,
    "RGM_TerroristHuntAdvMode": GameType.ADVERSARIAL,
    "RGM_ScatteredHuntAdvMode": GameType.ADVERSARIAL,
    "RGM_CaptureTheEnemyAdvMode": GameType.ADVERSARIAL,
    "RGM_CountDownMode": GameType.ADVERSARIAL,
    "RGM_KamikazeMode": GameType.ADVERSARIAL,
    "RGM_HostageRescueCoopMode": GameType.COOPERATIVE,
    "RGM_MissionMode": GameType.COOPERATIVE,
    "RGM_TerroristHuntCoopMode": GameType.COOPERATIVE,
}


def display_name(mode: str) -> str:
    return FRIENDLY_GAME_MODES.get(mode, mode)


def classify(mode: str) -> GameType:
    return GAME_TYPES.get(mode, GameType.COOPERATIVE)
