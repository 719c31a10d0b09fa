"""
Configuration for liveosc
Handles environment variables and the optional .env.liveosc file

Environment:
    LIVEOSC_HOST        host to listen on            (127.0.0.1)
    LIVEOSC_PORT        port to listen on            (9006)
    LIVEOSC_LIVE_HOST   host Live is running on      (127.0.0.1)
    LIVEOSC_LIVE_PORT   port LiveOSC listens on      (9005)
    LIVEOSC_WAIT_TIME   seconds before 'ready' probe (1.0)
    LIVEOSC_VERBOSE     1 to print OSC traffic       (0)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

DEFAULT_HOST = '127.0.0.1'
DEFAULT_PORT = 9006
DEFAULT_LIVE_HOST = '127.0.0.1'
DEFAULT_LIVE_PORT = 9005
DEFAULT_WAIT_TIME = 1.0

ENV_FILE = '.env.liveosc'


def _port(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or raw == '':
        return default
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}")
    if not 0 <= port <= 65535:
        raise ValueError(f"{key} out of range: {port}")
    return port


def _flag(env: Mapping[str, str], key: str) -> bool:
    return env.get(key, '0').strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class LiveOSCConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    live_host: str = DEFAULT_LIVE_HOST
    live_port: int = DEFAULT_LIVE_PORT
    wait_time: float = DEFAULT_WAIT_TIME
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "LiveOSCConfig":
        """Build a config from LIVEOSC_* variables (os.environ by default)"""
        env = os.environ if environ is None else environ

        raw_wait = env.get('LIVEOSC_WAIT_TIME')
        wait_time = DEFAULT_WAIT_TIME
        if raw_wait:
            try:
                wait_time = float(raw_wait)
            except ValueError:
                raise ValueError(f"LIVEOSC_WAIT_TIME must be a number, got {raw_wait!r}")
            if wait_time < 0:
                raise ValueError(f"LIVEOSC_WAIT_TIME must not be negative: {wait_time}")

        return cls(
            host=env.get('LIVEOSC_HOST') or DEFAULT_HOST,
            port=_port(env, 'LIVEOSC_PORT', DEFAULT_PORT),
            live_host=env.get('LIVEOSC_LIVE_HOST') or DEFAULT_LIVE_HOST,
            live_port=_port(env, 'LIVEOSC_LIVE_PORT', DEFAULT_LIVE_PORT),
            wait_time=wait_time,
            verbose=_flag(env, 'LIVEOSC_VERBOSE'),
        )


def load_env_file(env_path: str = ENV_FILE) -> Dict[str, str]:
    """Load KEY=VALUE lines from the first env file found"""
    env_vars = {}

    locations = [
        Path(env_path),
        Path.cwd() / env_path,
        Path.home() / env_path,
    ]

    for location in locations:
        if location.is_file():
            with open(location, 'r') as f:
                for line in f:
                    line = line.strip()
                    if not line or line.startswith('#') or '=' not in line:
                        continue
                    key, value = line.split('=', 1)
                    # Remove inline comments
                    if '#' in value:
                        value = value.split('#')[0]
                    env_vars[key.strip()] = value.strip()
            break

    return env_vars


def apply_env_file(env_path: str = ENV_FILE) -> Dict[str, str]:
    """Copy env file values into os.environ without overriding existing ones"""
    env_vars = load_env_file(env_path)
    for key, value in env_vars.items():
        os.environ.setdefault(key, value)
    return env_vars
