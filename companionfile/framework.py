"""Apple-style framework layout detection.

A framework keeps implementation files under ``<Fwk>/Sources`` (optionally
``<Fwk>/Sources/<Fwk>``) and headers under sibling ``Headers`` and
``PrivateHeaders`` trees that mirror the sub-folder structure, either flat
(``<Fwk>/Headers/Sub``) or namespaced (``<Fwk>/Headers/<Fwk>/Sub``).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

SOURCES_FOLDER = "Sources"
HEADER_FOLDERS = ("Headers", "PrivateHeaders")


@dataclass(frozen=True)
class FrameworkStructure:
    """Framework root, its name, and the source sub-folder below ``Sources``.

    ``source_sub_folder`` is everything below ``Sources`` verbatim;
    ``framework_sub_folder`` is the same without a leading framework name.
    """

    framework_path: Path
    framework_name: str
    framework_sub_folder: str
    source_sub_folder: str = ""


def framework_structure_for(directory: str | os.PathLike[str]) -> FrameworkStructure | None:
    """Derive the framework structure that ``directory`` lives in, if any.

    The ``Sources`` segment closest to ``directory`` wins. Returns ``None``
    when there is no ``Sources`` segment or it has no named parent.
    """
    parts = Path(directory).parts
    for index in range(len(parts) - 1, -1, -1):
        if parts[index] != SOURCES_FOLDER:
            continue
        if index == 0:
            return None
        framework_name = parts[index - 1]
        framework_path = Path(*parts[:index])
        if framework_path.anchor and framework_path == Path(framework_path.anchor):
            return None
        verbatim = list(parts[index + 1 :])
        below = verbatim[1:] if verbatim and verbatim[0] == framework_name else verbatim
        return FrameworkStructure(
            framework_path=framework_path,
            framework_name=framework_name,
            framework_sub_folder=os.path.join(*below) if below else "",
            source_sub_folder=os.path.join(*verbatim) if verbatim else "",
        )
    return None


def framework_header_directories(structure: FrameworkStructure) -> list[Path]:
    """Return candidate header directories in lookup priority order.

    Every ``Headers`` candidate precedes every ``PrivateHeaders`` candidate.
    Within a folder the namespaced layout comes first, then the flat one, then
    the framework name joined with the verbatim source sub-folder when that
    names a different directory.
    """
    candidates: list[Path] = []
    for header_folder in HEADER_FOLDERS:
        base = structure.framework_path / header_folder
        namespaced = base / structure.framework_name
        flat = base
        if structure.framework_sub_folder:
            namespaced = namespaced / structure.framework_sub_folder
            flat = flat / structure.framework_sub_folder
        candidates.append(namespaced)
        candidates.append(flat)
        if structure.source_sub_folder:
            verbatim = base / structure.framework_name / structure.source_sub_folder
            if verbatim not in candidates:
                candidates.append(verbatim)
    return candidates


__all__ = [
    "FrameworkStructure",
    "HEADER_FOLDERS",
    "SOURCES_FOLDER",
    "framework_header_directories",
    "framework_structure_for",
]
