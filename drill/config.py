"""Configuration helpers: data directory discovery and settings."""

import pathlib

DEFAULT_SETTINGS = {
    "scheduler": "sm2",
    "skip_window_seconds": 20,
    "extra_easy_progress": 2,
}


def get_drill_dir() -> pathlib.Path:
    config_path = pathlib.Path.home() / ".config" / "drill" / "config"
    if config_path.exists():
        for line in config_path.read_text().splitlines():
            line = line.strip()
            if line.startswith("DIR="):
                return pathlib.Path(line[4:].strip()).expanduser()
    default = pathlib.Path.home() / ".local" / "share" / "drill"
    return default


def load_settings(drill_dir: pathlib.Path) -> dict:
    settings_path = drill_dir / "settings.toml"
    settings = dict(DEFAULT_SETTINGS)
    if settings_path.exists():
        settings.update(_parse_toml_simple(settings_path.read_text()))
    return settings


def _parse_toml_simple(text: str) -> dict:
    """Minimal TOML parser for flat key=value files."""
    result = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip()
            if v.startswith('"') and v.endswith('"'):
                v = v[1:-1]
            elif v.isdigit():
                v = int(v)
            elif _is_float(v):
                v = float(v)
            elif v == "true":
                v = True
            elif v == "false":
                v = False
            result[k] = v
    return result


def _is_float(v: str) -> bool:
    try:
        float(v)
    except ValueError:
        return False
    return True
