import os

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def default_data_dir() -> str:
    """Directory holding the JSON store.

    SENIORID_DATA_DIR wins when set; otherwise <project>/data.
    """
    override = os.environ.get('SENIORID_DATA_DIR')
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return os.path.join(PROJECT_ROOT, 'data')


def public_base_url() -> str:
    """Base URL printed into verification links (no trailing slash)."""
    return os.environ.get('SENIORID_PUBLIC_URL', 'http://localhost:8501').rstrip('/')
