"""GitLab Connections

A registry of named GitLab connection profiles with a lazily-built,
per-connection cache of API clients.
"""

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("gitlab-connections")
except PackageNotFoundError:
    __version__ = "0.1.0"
__author__ = "GitLab Connections"
