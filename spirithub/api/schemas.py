# Schémas Pydantic exposés par l'API (réponses des calculateurs).
# Le contenu du jour et les sélections sont servis directement par les modèles du domaine
# (`DailyContentBundle`, `PickView`).

from pydantic import BaseModel


class BiorhythmResponse(BaseModel):
    """Lecture biorythmique d'une journée.

    Champs:
    - birth_date, target_date: str (YYYY-MM-DD)
    - physical, emotional, intellectual: int (pourcentage, -100..100)
    - levels: dict (cycle -> critical/low/medium/high)
    - is_critical_day: bool
    - critical_cycles: list[str]
    - summary: str (synthèse en roumain)
    """

    birth_date: str
    target_date: str
    physical: int
    emotional: int
    intellectual: int
    levels: dict[str, str]
    is_critical_day: bool
    critical_cycles: list[str]
    summary: str


class CriticalDayItem(BaseModel):
    date: str
    cycles: list[str]


class CriticalDaysResponse(BaseModel):
    birth_date: str
    start_date: str
    days: int
    critical_days: list[CriticalDayItem]


class NumberResponse(BaseModel):
    """Nombre numérologique calculé.

    Champs:
    - kind: str (daily-number, life-path, destiny)
    - number: int (1-9 ou 11/22/33)
    - is_master: bool
    - source: str (date ou nom ayant servi au calcul)
    """

    kind: str
    number: int
    is_master: bool
    source: str


class CompatibilityResponse(BaseModel):
    first: int
    second: int
    score: int
