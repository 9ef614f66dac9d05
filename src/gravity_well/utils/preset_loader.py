from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

PRESET_DIR = Path(__file__).resolve().parent.parent / "presets"


@dataclass(frozen=True)
class LoadedPreset:
    preset_path: Path
    resolved: Dict[str, Any]
    loaded_files: Tuple[Path, ...]  # includes + preset itself


def _deep_merge(base: Any, override: Any) -> Any:
    """dicts merge recursively; anything else in `override` replaces `base`."""
    if isinstance(base, dict) and isinstance(override, dict):
        out = dict(base)
        for k, v in override.items():
            out[k] = _deep_merge(out[k], v) if k in out else v
        return out
    if isinstance(override, list):
        return list(override)
    return override


def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping/dict: {path}")
    return data


def resolve_preset_path(preset: str | Path) -> Path:
    """Accept a path, or the bare name of a preset bundled with the package."""
    path = Path(preset).expanduser()
    if path.suffix not in (".yaml", ".yml"):
        path = PRESET_DIR / f"{preset}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"Preset not found: {preset}")
    return path.resolve()


def load_preset(preset: str | Path, _seen: Tuple[Path, ...] = ()) -> LoadedPreset:
    """
    Load a preset YAML whose optional `include:` list names other presets
    (relative to the including file). Includes are merged first, in order,
    then the preset's own keys on top. Includes may nest; cycles raise.
    """
    preset_path = resolve_preset_path(preset)
    if preset_path in _seen:
        raise ValueError(f"Preset include cycle at {preset_path}")

    data = _load_yaml(preset_path)
    include_list = data.pop("include", None) or []
    if not isinstance(include_list, list):
        raise ValueError(f"'include' must be a list in {preset_path}")

    merged: Dict[str, Any] = {}
    loaded: List[Path] = []
    for rel in include_list:
        if not isinstance(rel, str):
            raise ValueError(f"include entries must be strings. Got {type(rel)} in {preset_path}")
        inc = load_preset(preset_path.parent / rel, _seen + (preset_path,))
        merged = _deep_merge(merged, inc.resolved)
        loaded.extend(inc.loaded_files)

    merged = _deep_merge(merged, data)
    loaded.append(preset_path)
    return LoadedPreset(preset_path=preset_path, resolved=merged, loaded_files=tuple(loaded))
