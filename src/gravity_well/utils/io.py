from pathlib import Path


def unique_path(path: Path) -> Path:
    """Return `path`, or `name_2.ext`, `name_3.ext`, ... if it is taken. Keeps compound suffixes like .pkl.xz."""
    path = Path(path)
    if not path.exists():
        return path

    suffix = "".join(path.suffixes)
    stem = path.name[: len(path.name) - len(suffix)] if suffix else path.name

    i = 2
    while True:
        candidate = path.parent / f"{stem}_{i}{suffix}"
        if not candidate.exists():
            return candidate
        i += 1
