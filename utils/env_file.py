"""
Env File Updates
Upserts KEY=VALUE lines into a dotenv file
"""

import os
from typing import Dict, List, Mapping
from loguru import logger


def _line_key(line: str) -> str:
    """Key of a KEY=VALUE line ('' for comments and blank lines)"""
    stripped = line.strip()
    if not stripped or stripped.startswith('#') or '=' not in stripped:
        return ''
    key = stripped.split('=', 1)[0].strip()
    if key.startswith('export '):
        key = key[len('export '):].strip()
    return key


def upsert_lines(lines: List[str], values: Mapping[str, str]) -> List[str]:
    """
    Replace the line of each key in place, append keys not present

    Later duplicates of a replaced key are dropped so the file ends up
    with exactly one line per key.
    """
    result = []
    written = set()

    for line in lines:
        key = _line_key(line)

        if key in values:
            if key in written:
                continue
            result.append(f'{key}={values[key]}\n')
            written.add(key)
        else:
            result.append(line)

    missing = [key for key in values if key not in written]

    if missing and result and not result[-1].endswith('\n'):
        result[-1] = result[-1] + '\n'

    for key in missing:
        result.append(f'{key}={values[key]}\n')

    return result


def upsert_env_keys(env_path: str, values: Dict[str, str]) -> str:
    """
    Write values into an env file, creating it if needed

    Args:
        env_path: Path to the .env file
        values: Keys to insert or update

    Returns:
        Path that was written
    """
    lines = []

    if os.path.exists(env_path):
        with open(env_path, 'r') as f:
            lines = f.readlines()
    else:
        parent = os.path.dirname(env_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        logger.info(f"Creating {env_path}")

    lines = upsert_lines(lines, values)

    with open(env_path, 'w') as f:
        f.writelines(lines)

    for key, value in values.items():
        logger.success(f"Updated {env_path} with {key}={value}")

    return env_path
