"""Configuration management for site monitoring."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml

from site_status.models import Site


logger = logging.getLogger(__name__)

# Searched in order when no site file is given on the command line
DEFAULT_SITES_PATHS = (
    'config/sites.json',
    'config/sites.yaml',
    'sites.json',
    'sites.yaml',
)

REQUIRED_SITE_FIELDS = ('slug', 'name', 'url', 'host')


def get_default_sites_path() -> Optional[str]:
    """
    Find the default site list in the current directory.

    Returns:
        Path to the first existing candidate file, None if none exists.
    """
    for candidate in DEFAULT_SITES_PATHS:
        if Path(candidate).exists():
            return candidate
    return None


def load_sites(file_path: str) -> List[Site]:
    """
    Load and parse a site list (YAML or JSON).

    The file holds either a list of site objects or a mapping with a
    'sites' list.

    Args:
        file_path: Path to site list file

    Returns:
        Sites in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid or parsing fails
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Site configuration file not found: {file_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        if path.suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(content)
        elif path.suffix == '.json':
            data = json.loads(content)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

        if data is None:
            raise ValueError("Site configuration file is empty")

        if isinstance(data, dict):
            data = data.get('sites', [])
        if not isinstance(data, list):
            raise ValueError("Site configuration must be a list of sites or contain a 'sites' list")

        sites = []
        for idx, site_data in enumerate(data):
            try:
                sites.append(_parse_site(site_data))
            except ValueError as e:
                raise ValueError(f"Site at index {idx}: {str(e)}")

        validate_sites(sites)
        return sites

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax: {str(e)}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}")
    except Exception as e:
        if isinstance(e, (FileNotFoundError, ValueError)):
            raise
        raise ValueError(f"Failed to parse site configuration file: {str(e)}")


def validate_sites(sites: List[Site]) -> None:
    """
    Check a site list for problems the loader cannot catch per entry.

    Duplicate slugs are allowed; the later entry replaces the earlier one
    in the snapshot, so only a warning is logged.
    """
    seen = set()
    for site in sites:
        if site.slug in seen:
            logger.warning(f"Duplicate site slug '{site.slug}'; the last entry wins")
        seen.add(site.slug)


def _parse_site(site_data: Any) -> Site:
    """
    Parse a single site entry.

    Raises:
        ValueError: If a required field is missing or has the wrong type
    """
    if not isinstance(site_data, dict):
        raise ValueError("must be an object/dictionary")

    values = {}
    for field_name in REQUIRED_SITE_FIELDS:
        value = site_data.get(field_name)
        if value is None:
            raise ValueError(f"missing required '{field_name}' field")
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"'{field_name}' must be a non-empty string")
        values[field_name] = value.strip()

    domain = site_data.get('domain')
    if domain is not None:
        if not isinstance(domain, str):
            raise ValueError("'domain' must be a string")
        domain = domain.strip() or None

    return Site(domain=domain, **values)
