"""Load and parse an OpenAPI (or Swagger 2.0) spec.

JSON files go through the standard json module, anything else through
PyYAML, which also reads JSON.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import SpecParseError

logger = logging.getLogger(__name__)

_SWAGGER_VERSIONS = {"2.0"}
_OPENAPI_MAJOR = "3"


def _normalize_keys(node: Any) -> Any:
    """Stringify mapping keys so YAML response codes match their JSON form."""
    if isinstance(node, dict):
        return {str(k): _normalize_keys(v) for k, v in node.items()}
    if isinstance(node, list):
        return [_normalize_keys(v) for v in node]
    return node


def spec_version(spec: dict[str, Any]) -> str:
    """Return the declared spec version, e.g. '2.0' or '3.0.3'.

    Raises SpecParseError when the version marker is missing or unsupported.
    """
    if "swagger" in spec:
        version = str(spec["swagger"])
        if version in _SWAGGER_VERSIONS:
            return version
    elif "openapi" in spec:
        version = str(spec["openapi"])
        if version.split(".", 1)[0] == _OPENAPI_MAJOR:
            return version
    else:
        raise SpecParseError(
            "unsupported specification version: no 'openapi' or 'swagger' field"
        )
    raise SpecParseError(f"unsupported specification version {version!r}")


def load_spec(path: str | Path) -> dict[str, Any]:
    """Load the spec at ``path`` into a plain nested dict."""
    spec_file = Path(path)
    try:
        with open(spec_file, encoding="utf-8") as f:
            if spec_file.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise SpecParseError(f"failed to read spec {spec_file}") from e
    except UnicodeDecodeError as e:
        raise SpecParseError(f"spec {spec_file} is not valid UTF-8") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SpecParseError(f"failed to parse spec {spec_file}") from e

    if not isinstance(data, dict):
        raise SpecParseError(f"spec {spec_file} must contain a mapping at the top level")

    spec = _normalize_keys(data)
    version = spec_version(spec)
    logger.debug(f"Loaded spec {spec_file} (version {version})")
    return spec
