# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the utils module. This module will allow the application to:

# 1. Hold the default file list, commands and timeouts

# 2. Load JSON configuration files

# 3. Merge config overrides on top of the defaults

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

### Files every healthy checkout should have
DEFAULT_REQUIRED_FILES: Tuple[str, ...] = (
    "package.json",
    "client/src/App.tsx",
    "client/src/main.tsx",
    "tsconfig.json",
)

### External commands, keyed by what they're for
DEFAULT_COMMANDS: Dict[str, Tuple[str, ...]] = {
    "audit": ("npm", "audit", "--audit-level=moderate"),
    "outdated": ("npm", "outdated"),
    "typecheck": ("npx", "tsc", "--noEmit"),
    "build": ("npm", "run", "build"),
}

### Seconds each command gets before we kill it (builds are slow)
DEFAULT_TIMEOUTS: Dict[str, float] = {
    "audit": 30.0,
    "outdated": 30.0,
    "typecheck": 60.0,
    "build": 120.0,
}

###########################################################################

"""

Name: load_json_resource

Function: Load a JSON file from a path and return the parsed data.

Arguments: path - path to the JSON file to load

Returns: Dictionary containing the parsed JSON data

"""

def load_json_resource(path: Path) -> Dict[str, Any]:
    ### Open the file and load the JSON
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)

#$ End load_json_resource

###########################################################################

"""

Name: read_config

Function: Read a configuration file from a path. If no path is provided,

return an empty dict. If the file doesn't exist, raise an error.

Arguments: path - optional path to the config file

Returns: Dictionary containing the parsed config data

"""

def read_config(path: Path | None) -> Dict[str, Any]:
    ### If no path provided, return empty config
    if path is None:
        return {}
    ### If the file doesn't exist, complain loudly
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    ### Load the JSON config (it has to be an object, lists make no sense here)
    data = load_json_resource(path)
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")
    return data

#$ End read_config

###########################################################################

"""

Name: resolve_commands

Function: Start from DEFAULT_COMMANDS and swap in anything the config's

"commands" section provides. Strings get split on whitespace so "pnpm audit"

works as well as ["pnpm", "audit"].

Arguments: config - configuration dictionary

Returns: Dictionary of command name -> argv tuple

"""

def resolve_commands(config: Dict[str, Any]) -> Dict[str, Tuple[str, ...]]:
    commands = dict(DEFAULT_COMMANDS)
    for name, value in _config_section(config, "commands").items():
        if isinstance(value, str):
            argv = tuple(value.split())
        elif isinstance(value, list) and all(isinstance(part, str) for part in value):
            argv = tuple(value)
        else:
            raise ValueError(f"Config key 'commands.{name}' must be a string or a list of strings")
        if not argv:
            raise ValueError(f"Config key 'commands.{name}' must not be empty")
        commands[name] = argv
    return commands

#$ End resolve_commands

###########################################################################

"""

Name: resolve_timeouts

Function: Same idea as resolve_commands, but for the per-command timeouts.

Anything that isn't a positive number is rejected (booleans too, JSON true is

not a timeout).

Arguments: config - configuration dictionary

Returns: Dictionary of command name -> seconds

"""

def resolve_timeouts(config: Dict[str, Any]) -> Dict[str, float]:
    timeouts = dict(DEFAULT_TIMEOUTS)
    for name, value in _config_section(config, "timeouts").items():
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError(f"Config key 'timeouts.{name}' must be a positive number of seconds")
        timeouts[name] = float(value)
    return timeouts

#$ End resolve_timeouts

###########################################################################

"""

Name: resolve_required_files

Function: The list of files the structure check insists on. A bare string is

rejected, otherwise we'd go looking for one file per letter.

Arguments: config - configuration dictionary

Returns: List of relative paths

"""

def resolve_required_files(config: Dict[str, Any]) -> List[str]:
    files = config.get("required_files")
    if files is None:
        return list(DEFAULT_REQUIRED_FILES)
    if not isinstance(files, list) or not all(isinstance(item, str) for item in files):
        raise ValueError("Config key 'required_files' must be a list of strings")
    return list(files)

#$ End resolve_required_files

def _config_section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = config.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"Config key '{key}' must be a JSON object")
    return section

#$ End _config_section

###########################################################################

"""

Name: resolve_project_dir

Function: Figure out which checkout to analyze. The command line wins, then

the config, then wherever we were launched from.

Arguments: cli_value - --project-dir value (or None)

            config - configuration dictionary

Returns: Absolute Path to the project directory

"""

def resolve_project_dir(cli_value: Path | None, config: Dict[str, Any]) -> Path:
    configured = config.get("project_dir")
    if configured is not None and not isinstance(configured, str):
        raise ValueError("Config key 'project_dir' must be a string")
    if cli_value is not None:
        return cli_value.expanduser().resolve()
    if configured:
        return Path(configured).expanduser().resolve()
    return Path.cwd()

#$ End resolve_project_dir
