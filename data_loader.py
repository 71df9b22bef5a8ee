import json
import logging
import os
import sys
import urllib.parse

import requests

from config import ASTEROID_ASSETS, ASSETS_SOURCE, REQUEST_TIMEOUT, USER_AGENT


def resource_path(relative_path):
    """ Get absolute path to resource, works for dev and for PyInstaller """
    base_path = getattr(sys, '_MEIPASS', os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(base_path, relative_path)


def is_url(source):
    return urllib.parse.urlparse(str(source)).scheme in ('http', 'https')


def _records_from_payload(payload, label):
    # Asset files look like {"data": [record, ...]}
    if isinstance(payload, dict) and isinstance(payload.get('data'), list):
        return payload['data']
    logging.error(f"{label} does not contain the expected 'data' list.")
    return []


def fetch_remote_records(base_url, filename):
    """Downloads one asteroid family file from a web server."""
    url = urllib.parse.urljoin(base_url.rstrip('/') + '/', filename)
    headers = {'User-Agent': USER_AGENT}
    try:
        response = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        return _records_from_payload(response.json(), url)
    except requests.exceptions.HTTPError as e:
        logging.error(f"HTTP Error fetching {url}: {e}")
    except requests.exceptions.ConnectionError as e:
        logging.error(f"Connection Error: Could not connect to {url}. Details: {e}")
    except requests.exceptions.Timeout as e:
        logging.error(f"Timeout Error fetching {url}. Details: {e}")
    except ValueError as e:
        logging.error(f"Invalid JSON from {url}: {e}")
    except requests.exceptions.RequestException as e:
        logging.error(f"Request for {url} failed: {e}")
    return []


def load_local_records(directory, filename):
    """Reads one asteroid family file from disk."""
    if not os.path.isabs(directory):
        directory = resource_path(directory)
    path = os.path.join(directory, filename)
    if not os.path.exists(path):
        logging.error(f"Asteroid data file '{path}' not found.")
        return []
    try:
        with open(path, mode='r', encoding='utf-8') as f:
            return _records_from_payload(json.load(f), path)
    except (OSError, ValueError) as e:
        logging.error(f"Error loading asteroid data from {path}: {e}")
    return []


def fetch_family_data(assets=ASTEROID_ASSETS, source=ASSETS_SOURCE):
    """
    Fetches every asteroid family file before the simulation starts.

    source is either a directory (relative paths resolve next to the program) or an
    http(s) base URL. A family whose file cannot be read comes back empty.

    Returns:
        dict: {family name: [raw element records]}, in asset order.
    """
    remote = is_url(source)
    family_data = {}
    for name, filename in assets:
        if remote:
            records = fetch_remote_records(source, filename)
        else:
            records = load_local_records(source, filename)
        logging.info(f"{name}: {len(records)} records from {filename}")
        family_data[name] = records
    return family_data
