"""
Configuration file support for ComplexEval CLI.

Supports YAML and JSON config files with CLI argument override.

Example config (YAML):

    complexes: predicted_complexes.txt
    localization: localization.txt
    coloc:
      score: ppv
      weighted: false
      ignore_missing: true
      outtype: 0
    correlate:
      method: spearman
"""

import json
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from complexeval.quality.colocalization import SCORE_TYPES
from complexeval.stats.correlation import CORRELATION_METHODS


_CONFIG_LOADERS = {
    '.yaml': yaml.safe_load,
    '.yml': yaml.safe_load,
    '.json': json.load,
}


def load_config(config_path: Path) -> Dict[str, Any]:
    """
    Read a complexeval config file.

    The file holds optional top-level ``complexes``, ``localization`` and
    ``output`` paths plus ``coloc`` and ``correlate`` sections. An empty file
    is an empty config.

    Parameters:
        config_path: .yaml, .yml or .json file

    Returns:
        Config mapping (not yet validated, see :func:`validate_config`)

    Raises:
        FileNotFoundError: If config_path does not exist
        ValueError: If the suffix is unknown or the file does not parse to a mapping

    Examples:
        >>> config = load_config(Path("coloc.yaml"))
        >>> config['coloc']['score']
        'ppv'
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    loader = _CONFIG_LOADERS.get(config_path.suffix.lower())
    if loader is None:
        raise ValueError(
            f"Unsupported config format '{config_path.suffix}' for {config_path.name}; "
            f"expected one of {', '.join(_CONFIG_LOADERS)}"
        )

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            config = loader(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path.name}: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {config_path.name}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(
            f"{config_path.name} must hold a mapping of settings, "
            f"got {type(config).__name__}"
        )
    return config


def _merge_value(cli_value: Any, config_value: Any, was_explicitly_set: bool) -> Any:
    """
    Merge a single config value with a CLI argument.

    Rules:
    - CLI args ALWAYS override config if explicitly set
    - If CLI arg not set, use config value
    - If neither set, keep CLI default
    """
    if was_explicitly_set:
        return cli_value

    if config_value is not None:
        return config_value

    return cli_value


_SHORT_TO_LONG = {
    'i': 'input',
    'o': 'output',
}


def _explicit_args(cli_args: Optional[List[str]]) -> set:
    """Destination names of arguments given on the command line."""
    explicit = set()
    for arg in cli_args or ():
        if arg.startswith('--'):
            explicit.add(arg[2:].split('=', 1)[0].replace('-', '_'))
        elif arg.startswith('-') and len(arg) == 2 and arg[1] in _SHORT_TO_LONG:
            explicit.add(_SHORT_TO_LONG[arg[1]])
    return explicit


def merge_config_with_args(
    config: Dict[str, Any],
    args: Namespace,
    cli_args: Optional[List[str]] = None,
) -> Namespace:
    """
    Merge config file values with CLI arguments.

    Priority (highest to lowest):
    1. Explicitly provided CLI arguments
    2. Config file values
    3. CLI argument defaults

    Only attributes that exist on ``args`` are merged, so the same config file
    can serve several subcommands.

    Parameters:
        config: Configuration dictionary from load_config()
        args: Parsed CLI arguments (argparse.Namespace)
        cli_args: Raw CLI arguments list (for detecting explicit values)
                  If None, assumes all args are defaults

    Returns:
        Updated Namespace with merged values
    """
    explicit = _explicit_args(cli_args)
    merged = Namespace(**vars(args))

    def merge(arg_name: str, config_value: Any) -> None:
        if not hasattr(merged, arg_name):
            return
        was_explicit = arg_name in explicit
        setattr(merged, arg_name, _merge_value(getattr(merged, arg_name), config_value, was_explicit))

    # === Top-level paths ===
    if config.get('output') is not None:
        merge('output', Path(config['output']))

    if getattr(merged, 'command', None) == 'coloc':
        if config.get('complexes') is not None:
            merge('input', Path(config['complexes']))
        if config.get('localization') is not None:
            merge('loc', Path(config['localization']))

    # === Coloc section ===
    coloc = config.get('coloc') or {}
    if 'outtype' in coloc:
        merge('outtype', coloc['outtype'])
    if 'score' in coloc:
        merge('ppv', coloc['score'] == 'ppv')
    if 'weighted' in coloc:
        merge('nonweighted', not coloc['weighted'])
    if 'ignore_missing' in coloc:
        merge('nomiss', bool(coloc['ignore_missing']))

    # === Correlate section ===
    correlate = config.get('correlate') or {}
    if getattr(merged, 'command', None) == 'correlate':
        if correlate.get('input') is not None:
            merge('input', Path(correlate['input']))
        for key in ('method', 'sep', 'x', 'y'):
            if key in correlate:
                merge(key, correlate[key])

    return merged


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Parameters:
        config: Configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    coloc = config.get('coloc') or {}
    if not isinstance(coloc, dict):
        raise ValueError("'coloc' section must be a mapping")

    if 'score' in coloc and coloc['score'] not in SCORE_TYPES:
        raise ValueError(
            f"Invalid score type '{coloc['score']}'. "
            f"Choose from: {', '.join(SCORE_TYPES)}"
        )

    if 'outtype' in coloc and coloc['outtype'] not in (0, 1, 2):
        raise ValueError(f"Output type must be 0, 1 or 2, got: {coloc['outtype']}")

    for key in ('weighted', 'ignore_missing'):
        if key in coloc and not isinstance(coloc[key], bool):
            raise ValueError(f"coloc.{key} must be true or false, got: {coloc[key]}")

    correlate = config.get('correlate') or {}
    if not isinstance(correlate, dict):
        raise ValueError("'correlate' section must be a mapping")

    if 'method' in correlate and correlate['method'] not in CORRELATION_METHODS:
        raise ValueError(
            f"Invalid correlation method '{correlate['method']}'. "
            f"Choose from: {', '.join(CORRELATION_METHODS)}"
        )
