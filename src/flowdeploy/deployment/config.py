#!/usr/bin/env python3
"""
Deployment configuration loading and validation.

The configuration is a flat KEY=value env file read once per run. Only the
provider selector and the provider's credential are interpreted; every other
key (feature toggles and the like) is carried through as an opaque string.

Copyright (c) Advanced Micro Devices, Inc. All rights reserved.
"""

import logging
import re
import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from flowdeploy.core.errors import (
    InvalidConfigurationError,
    MissingCredentialError,
    create_error_context,
)

logger = logging.getLogger(__name__)

PROVIDER_KEY = "PROVIDER"

DEFAULT_ENV_FILE = ".env"
DEFAULT_ENV_TEMPLATE = ".env.example"

_VAR_RE = re.compile(
    r"""
    ^\s*
    (?:export\s+)?            # optional "export " prefix
    (?P<key>[A-Za-z_]\w*)
    \s*=\s*
    (?P<value>.*)
    $
    """,
    re.VERBOSE,
)


class Provider(str, Enum):
    """LLM backends the deployed service can run against."""

    ANTHROPIC = "anthropic"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    ONNX = "onnx"

    @property
    def credential_key(self) -> Optional[str]:
        """Env key holding this provider's API key, None for local inference."""
        return PROVIDER_CREDENTIALS[self]

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


# Must cover every Provider member
PROVIDER_CREDENTIALS: Dict[Provider, Optional[str]] = {
    Provider.ANTHROPIC: "ANTHROPIC_API_KEY",
    Provider.OPENROUTER: "OPENROUTER_API_KEY",
    Provider.GEMINI: "GOOGLE_GEMINI_API_KEY",
    Provider.ONNX: None,
}


@dataclass(frozen=True)
class DeploymentConfig:
    """Validated, read-only deployment settings for one run."""

    provider: Provider
    values: Mapping[str, str] = field(default_factory=dict)
    source: Optional[Path] = None

    def __post_init__(self):
        # private read-only copy
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    @property
    def credential_key(self) -> Optional[str]:
        return self.provider.credential_key


def parse_env_text(text: str) -> Dict[str, str]:
    """
    Parse env-file text into a {key: value} mapping.

    Handles:
    * blank/comment lines
    * ``export VAR=value``
    * quoted values (single or double)
    * inline ``# comments`` outside of quotes
    """
    result: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        match = _VAR_RE.match(line)
        if match is None:
            logger.debug("Ignoring unparsable env line: %r", line)
            continue
        key = match.group("key")
        value = match.group("value").strip()

        quote = value[:1]
        closing = value.find(quote, 1) if quote in ('"', "'") else -1
        if closing != -1:
            # anything after the closing quote is a comment
            value = value[1:closing]
        elif value.startswith("#"):
            value = ""
        elif " #" in value:
            value = value[: value.index(" #")].rstrip()

        result[key] = value
    return result


def load_env_file(path: Path) -> Dict[str, str]:
    """
    Read a flat env file.

    Raises:
        InvalidConfigurationError: If the file does not exist or cannot be read
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidConfigurationError(
            f"Cannot read configuration file {path}: {e.strerror or e}",
            context=create_error_context(
                operation="load_env_file", phase="configuration", file_path=str(path)
            ),
            suggestions=["Create the file from .env.example and set PROVIDER"],
            cause=e,
        ) from e
    values = parse_env_text(text)
    logger.debug("Loaded %d settings from %s", len(values), path)
    return values


def ensure_env_file(
    path: Path,
    template: Path,
    confirm: Optional[Callable[[str], object]] = None,
    announce: Optional[Callable[[str], None]] = None,
) -> bool:
    """
    Make sure the env file exists, bootstrapping it from the template.

    Args:
        path: Env file the run will read
        template: Example file copied when path is missing
        confirm: Blocks until the operator has edited the new file
        announce: Receives operator-facing messages

    Returns:
        True if the file was created from the template

    Raises:
        InvalidConfigurationError: If neither file exists
    """
    path, template = Path(path), Path(template)
    if path.is_file():
        return False

    if not template.is_file():
        raise InvalidConfigurationError(
            f"No {path.name} file found and template {template} does not exist",
            context=create_error_context(
                operation="ensure_env_file", phase="configuration", file_path=str(path)
            ),
            suggestions=[f"Create {path} with PROVIDER and the matching API key"],
        )

    announce = announce or logger.info
    shutil.copyfile(template, path)
    announce(f"Created {path} from {template}")
    announce(
        "Required settings:\n"
        f"  - {PROVIDER_KEY}: one of {', '.join(repr(v) for v in Provider.values())}\n"
        "  - the API key variable for that provider"
    )
    if confirm is not None:
        confirm(f"Press Enter after configuring {path}")
    return True


def validate_config(values: Mapping[str, str], source: Optional[Path] = None) -> DeploymentConfig:
    """
    Validate raw settings and build the immutable DeploymentConfig.

    Raises:
        InvalidConfigurationError: If PROVIDER is missing or unrecognized
        MissingCredentialError: If the provider's API key is missing or empty
    """
    context = create_error_context(
        operation="validate_config",
        phase="configuration",
        file_path=str(source) if source else None,
    )
    valid = ", ".join(Provider.values())

    raw_provider = (values.get(PROVIDER_KEY) or "").strip()
    if not raw_provider:
        raise InvalidConfigurationError(
            f"{PROVIDER_KEY} not set",
            context=context,
            suggestions=[f"Set {PROVIDER_KEY} to one of: {valid}"],
        )

    try:
        provider = Provider(raw_provider)
    except ValueError:
        raise InvalidConfigurationError(
            f"Invalid {PROVIDER_KEY} value: {raw_provider}. Valid options: {valid}",
            context=context,
            suggestions=[f"Set {PROVIDER_KEY} to one of: {valid}"],
        ) from None

    key = provider.credential_key
    if key is None:
        logger.info("%s provider selected (no API key needed)", provider.value)
    elif not (values.get(key) or "").strip():
        raise MissingCredentialError(
            f"{key} not set for {provider.value} provider",
            variable=key,
            context=context,
            suggestions=[f"Add {key}=<your key> to the configuration file"],
        )

    return DeploymentConfig(provider=provider, values=values, source=source)
