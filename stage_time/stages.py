"""The fixed stage table.

Order matters: when two stages are exactly equidistant from a point, the one
listed first wins.
"""

from __future__ import annotations

from typing import Final

from stage_time.models import Stage


STAGES: Final[tuple[Stage, ...]] = (
    Stage("HPTTRSN", 53.30959, 12.73694),
    Stage("Turmbühne", 53.30864, 12.73732),
    Stage("Dubstation", 53.30766, 12.73471),
    Stage("Casino", 53.30659, 12.73436),
    Stage("FreiKörperKüste", 53.30399, 12.73192),
    Stage("Tanzwüste", 53.31186, 12.73839),
    Stage("Stoners Garden", 53.31189, 12.74076),
    Stage("Trancefloor", 53.31224, 12.74221),
    Stage("Rootsbase", 53.31198, 12.74359),
    Stage("Extravaganza", 53.31059, 12.74393),
    Stage("Sonnendeck", 53.31089, 12.74322),
    Stage("Palapa", 53.30974, 12.74381),
    Stage("Panne Eichel", 53.31049, 12.75295),
)


def stage_by_name(name: str) -> Stage:
    """Look up a stage by name.

    Raises:
        KeyError: If no stage has that name.
    """

    for stage in STAGES:
        if stage.name == name:
            return stage
    raise KeyError(name)
