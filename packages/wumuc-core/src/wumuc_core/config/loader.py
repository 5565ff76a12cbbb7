"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import WumucConfig

CONFIG_ENV_VAR = "WUMUC_CONFIG"

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    candidates = [
        Path(cli_path) if cli_path else None,
        Path(env_path) if env_path else None,
        Path("./wumuc.yaml"),
        Path.home() / ".wumuc" / "config.yaml",
    ]
    return [p for p in candidates if p is not None]


def load_config(cli_path: str | None = None) -> WumucConfig:
    """Load config with resolution order: CLI > $WUMUC_CONFIG > project-local > user-global > defaults."""
    if cli_path and not Path(cli_path).exists():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        try:
            with open(path) as f:
                raw = yaml.safe_load(f)
            if raw is None:
                continue
            raw = _expand_env_vars(raw)
            return WumucConfig(**raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        except TypeError as e:
            raise ValueError(f"Invalid config in {path}: expected a mapping") from e

    return WumucConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} and ${VAR:-default} references in strings."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `wumuc config init`
DEFAULT_CONFIG_TEMPLATE = """\
# wumuc.yaml

# Files in the update directory that are packaged as-is rather than placed
# into the distribution layout. All of them are skipped while scanning.
resources:
  mandatory:
    - update-descriptor.yaml
    - LICENSE.txt
  optional:
    - README.txt
    - instructions.txt
    - NOT_A_CONTRIBUTION.txt
  skip: []

# Update naming and staging layout
update:
  name_prefix: "WSO2-CARBON-UPDATE"
  descriptor_file: "update-descriptor.yaml"
  carbon_home: "carbon.home"
  staging_dir: "temp"

# Skip files whose content already matches the distribution
check_hashes: true

# Logging
log_level: "warn"              # debug | info | warn | error
log_format: "text"             # text | json
"""
