from typing import Iterable, List

from binder.models import AccessMode

# Abbreviations in the order they appear in a signature
ACCESS_MODE_ABBREVIATIONS = {
    AccessMode.READ_WRITE_ONCE: "RWO",
    AccessMode.READ_ONLY_MANY: "ROX",
    AccessMode.READ_WRITE_MANY: "RWX",
}


def get_access_modes_as_string(modes: Iterable[AccessMode]) -> str:
    """
    Build the capability signature of a set of access modes.

    The result only depends on which modes are present, never on their order
    or repetition, e.g. [RWX, RWO, RWO] -> "RWO,RWX".
    """
    present = {AccessMode(mode) for mode in modes}
    return ",".join(abbrev for mode, abbrev in ACCESS_MODE_ABBREVIATIONS.items() if mode in present)


def get_access_modes_from_string(signature: str) -> List[AccessMode]:
    """Inverse of get_access_modes_as_string. Unknown abbreviations are ignored."""
    wanted = {part.strip() for part in (signature or "").split(",") if part.strip()}
    return [mode for mode, abbrev in ACCESS_MODE_ABBREVIATIONS.items() if abbrev in wanted]
