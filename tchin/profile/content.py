from __future__ import annotations

from pydantic import BaseModel


class Badge(BaseModel):
    id: str
    name: str
    desc: str


class ProfileOut(BaseModel):
    title: str
    initials: str
    favourite_ambiances: list[str]
    badges: list[Badge]
    challenges: list[str]


BADGES = [
    Badge(id="bdg1", name="Explorateur", desc="3 bars testés"),
    Badge(id="bdg2", name="Expert cocktails", desc="5 cocktails différents"),
    Badge(id="bdg3", name="VIP des bars", desc="Événements exclusifs"),
]

CHALLENGES = [
    "Tester un cocktail signature ce mois-ci",
    "Poster une photo dans un bar partenaire",
    "Découvrir un nouveau rooftop",
]


def get_profile() -> ProfileOut:
    # Static until user profiles come from an upstream account service
    return ProfileOut(
        title="Mon profil",
        initials="TC",
        favourite_ambiances=["Chill", "Rooftop"],
        badges=list(BADGES),
        challenges=list(CHALLENGES),
    )
