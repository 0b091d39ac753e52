from __future__ import annotations

import os
import re
import typing as t
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from pydantic import ValidationError

from . import schema


@dataclass
class ZoneConfig:
    elastic_ip_allocation_id: t.Optional[str] = None
    name: t.Optional[str] = None


@dataclass
class NetworkConfig:
    vpc_id: t.Optional[str] = None
    cluster_name: str = ""
    zones: t.List[ZoneConfig] = field(default_factory=list)

    def allocation_ids(self) -> t.List[str]:
        return [z.elastic_ip_allocation_id for z in self.zones if z.elastic_ip_allocation_id]


@dataclass
class LoadedConfig:
    network: NetworkConfig
    region: t.Optional[str] = None

    def summary(self) -> str:
        lines = [
            f"Cluster: {self.network.cluster_name}",
            f"Region: {self.region or '-'}",
            f"VPC: {self.network.vpc_id or '(new)'}",
            "Zones:",
        ]
        for z in self.network.zones:
            lines.append(f"  - {z.name or '-'} eip={z.elastic_ip_allocation_id or '-'}")
        return "\n".join(lines)


_ENV_PATTERN = re.compile(r"\$\{([A-Za-z0-9_]+)\}")


def _expand_env_value(val: str, missing: set[str]) -> str:
    """Expand ${VAR} placeholders in a single string.

    A missing or empty variable is recorded in ``missing`` and its placeholder
    is left in place.
    """
    def repl(match: re.Match[str]) -> str:
        name = match.group(1)
        env_val = os.environ.get(name)
        if env_val is None or env_val == "":
            missing.add(name)
            return match.group(0)
        return env_val

    return _ENV_PATTERN.sub(repl, val)


def _expand_env(obj: t.Any, missing: set[str]) -> t.Any:
    """Recursively expand ${VAR} placeholders in a loaded YAML structure."""
    if isinstance(obj, dict):
        return {k: _expand_env(v, missing) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env(v, missing) for v in obj]
    if isinstance(obj, str):
        return _expand_env_value(obj, missing)
    return obj


def to_network_config(cfg: schema.PreflightConfig) -> NetworkConfig:
    return NetworkConfig(
        vpc_id=cfg.networks.vpc.id,
        cluster_name=cfg.cluster_name,
        zones=[
            ZoneConfig(elastic_ip_allocation_id=z.elastic_ip_allocation_id, name=z.name)
            for z in cfg.networks.zones
        ],
    )


def parse_config(raw: t.Any) -> schema.PreflightConfig:
    """Expand placeholders and validate a raw YAML structure.

    Raises ValueError listing every missing variable or schema violation.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("Configuration must be a YAML mapping at the top level")

    missing: set[str] = set()
    expanded = _expand_env(raw, missing)
    if missing:
        # Surface all missing vars at once to help the user export them.
        raise ValueError(
            "Missing environment variables for placeholders: "
            + ", ".join(sorted(missing))
        )

    try:
        return schema.validate_config(expanded)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            loc = " -> ".join(str(x) for x in err["loc"])
            errors.append(f"  • {loc}: {err['msg']}")
        raise ValueError(
            "Configuration validation failed:\n" + "\n".join(errors) +
            "\n\nPlease fix these errors and try again."
        ) from e


def load_local_config(path: Path) -> schema.PreflightConfig:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML in {path}: {e}") from e
    return parse_config(raw)


def load_network_config(path: Path) -> LoadedConfig:
    cfg = load_local_config(path)
    return LoadedConfig(network=to_network_config(cfg), region=cfg.region)
