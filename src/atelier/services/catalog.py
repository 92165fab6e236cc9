"""Offering catalog - what a client can buy and what it costs."""

from dataclasses import dataclass

from src.atelier.core.exceptions import DomainValidationError


@dataclass(frozen=True)
class Offering:
    name: str
    credits: int


OFFERINGS: tuple[Offering, ...] = (
    Offering(name="Diseño de marca", credits=10),
    Offering(name="Diseño de ilustración", credits=15),
    Offering(name="Edición de video", credits=20),
)


def list_offerings() -> list[Offering]:
    return list(OFFERINGS)


def get_offering(name: str) -> Offering:
    """Look up an offering by its exact name.

    Raises:
        DomainValidationError: No offering has that name.
    """
    for offering in OFFERINGS:
        if offering.name == name:
            return offering
    raise DomainValidationError(f"Unknown offering type: {name!r}")
