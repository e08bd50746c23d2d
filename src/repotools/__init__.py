"""
Operator scripts for local clones of GitHub repositories and .env files.

The commands compare an organization's repositories with local clones, bulk
update working copies, load `.env` files and list the available commands.
The `.env` loader is exposed here for programmatic use.
"""

from .utils.env import apply_to_environ, load_env_file

__version__ = "0.1.0"

__all__ = ["__version__", "apply_to_environ", "load_env_file"]
